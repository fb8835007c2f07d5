"""Read-side projections of the namelist: event/division hierarchy and teams.

Both projections are recomputed from the source collections on every call.
"""

from rundown import utils
from rundown.division import DivisionBucket
from rundown.team import Team


class EventBucket:
    """
    One event and its division buckets.

    Attributes:
        event (EventConfig): The event configuration.
        divisions (list[DivisionBucket]): Buckets in division configuration order.
    """

    def __init__(self, event, divisions):
        self.event = event
        self.divisions = divisions

    def __repr__(self):
        return f"{self.event.code}"

    def get_division(self, division_name):
        """Returns the bucket for `division_name`, or None."""
        for bucket in self.divisions:
            if bucket.division == division_name:
                return bucket
        return None

    @property
    def count(self):
        return sum(bucket.count for bucket in self.divisions)


def build_hierarchy(events, divisions, participants, entry_codes):
    """
    Groups participants by event, then by division.

    Divisions are filtered to each event's allow-list, or all divisions when
    the event has none. Participant order within a bucket follows the store.

    Args:
        events (list[EventConfig]): Configured events, in order.
        divisions (list[DivisionConfig]): Configured divisions, in order.
        participants (list[Participant]): All participants.
        entry_codes (dict[str, str]): Flat "EVENT|DIVISION" -> prefix map.

    Returns:
        list[EventBucket]: One bucket per configured event.
    """
    hierarchy = []
    for event in events:
        buckets = []
        for division in divisions:
            if not event.allows(division.name):
                continue
            buckets.append(
                DivisionBucket(
                    event_code=event.code,
                    division=division.name,
                    entry_code=entry_codes.get(
                        utils.entry_code_key(event.code, division.name), ""
                    ),
                    participants=[
                        p
                        for p in participants
                        if p.event_code == event.code and p.division == division.name
                    ],
                )
            )
        hierarchy.append(EventBucket(event, buckets))
    return hierarchy


def build_teams(participants):
    """
    Groups participants by team, preserving first-seen team order and the
    original participant order within each team.

    Returns:
        list[Team]: Teams in first-seen order.
    """
    teams = {}
    for p in participants:
        name = p.team or utils.INDEPENDENT_TEAM
        teams.setdefault(name, Team(name)).add_participant(p)
    return list(teams.values())
