from rundown import utils
from rundown.group import Group


class Team(Group):
    """
    Participants sharing a team affiliation, in first-come-first-served order.

    Attributes:
        name (str): Team name, or INDEPENDENT for entries without one.
        participants (list[Participant]): Team members in store order.
    """

    def __init__(self, name):
        self.name = name
        self.participants = []

    def __repr__(self):
        return f"{self.name}"

    def add_participant(self, participant):
        """Adds a participant to the team."""
        self.participants.append(participant)

    @property
    def person_names(self):
        """Returns the distinct person names across all entries, first-seen order."""
        names = []
        for p in self.participants:
            for name in utils.split_names(p.name):
                if name not in names:
                    names.append(name)
        return names

    @property
    def count(self):
        """Returns the number of unique people on the team."""
        return len(self.person_names)
