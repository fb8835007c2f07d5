from rundown.group import Group


class Heat(Group):
    """
    Represents one scheduled heat: a numbered time block whose entries
    compete at distinct stations.

    Attributes:
        number (int): Heat number.
        schedule_time (str): Heat start time (HH:MM).
        participants (list[Participant]): Participants in station order.
    """

    def __init__(self, number, schedule_time):
        self.number = number
        self.schedule_time = schedule_time
        self.participants = []

    def __repr__(self):
        return f"{self.number}"

    def add_participant(self, participant):
        self.participants.append(participant)

    @property
    def stations(self):
        """Returns the distinct station numbers used, ascending."""
        return sorted({p.station for p in self.participants if p.station is not None})

    @property
    def event_codes(self):
        """Returns the event codes running in this heat, first-seen order."""
        codes = []
        for p in self.participants:
            if p.event_code not in codes:
                codes.append(p.event_code)
        return codes
