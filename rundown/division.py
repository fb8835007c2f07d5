from rundown.group import Group


class DivisionBucket(Group):
    """
    Participants of one event entered in one division.

    Attributes:
        event_code (str): The parent event code.
        division (str): The division name.
        entry_code (str): Configured entry-code prefix, empty if unset.
        participants (list[Participant]): Matching participants, in store order.
    """

    def __init__(self, event_code, division, entry_code, participants):
        self.event_code = event_code
        self.division = division
        self.entry_code = entry_code
        self.participants = participants

    def __repr__(self):
        return f"{self.event_code} / {self.division}"
