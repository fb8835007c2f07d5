import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SCHEDULE_FIELDS = ("heat", "station", "schedule_time")


class Participant(BaseModel):
    """
    Represents one roster line: a single competitor, or one row of a team entry.

    Rows that share a non-empty `group_id` form a single competition entry and
    always receive the same heat, station and time.

    Attributes:
        id (str): Unique identifier.
        name (str): Display name. Team entries may hold several names
            separated by newlines or commas.
        team (str): Team affiliation, empty for independents.
        event_code (str): Code of the event entered.
        division (str): Name of the division entered.
        notes (str or None): Free-text notes.
        custom_id (str or None): External or customer identifier.
        group_id (str or None): Links several rows into one entry.
        heat (int or None): Scheduled heat number.
        station (int or None): Scheduled station within the heat.
        schedule_time (str or None): Scheduled heat start time (HH:MM).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    team: str = ""
    event_code: str = ""
    division: str = ""
    notes: str | None = None
    custom_id: str | None = None
    group_id: str | None = None
    heat: int | None = None
    station: int | None = None
    schedule_time: str | None = None

    def __repr__(self):
        return f"{self.name}"

    def clear_schedule(self) -> None:
        """Removes heat, station and time."""
        self.heat = None
        self.station = None
        self.schedule_time = None

    def set_schedule(self, heat: int, station: int, schedule_time: str) -> None:
        self.heat = heat
        self.station = station
        self.schedule_time = schedule_time

    def schedule_snapshot(self) -> dict:
        return {field: getattr(self, field) for field in SCHEDULE_FIELDS}
