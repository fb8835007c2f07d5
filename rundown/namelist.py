import csv

from rundown import utils
from rundown.algorithms import get_generator
from rundown.config import DivisionConfig, EventConfig, RundownConfig
from rundown.entry_codes import get_participant_entry_code
from rundown.group import Group
from rundown.heat import Heat
from rundown.hierarchy import build_hierarchy, build_teams
from rundown.history import HistoryLedger, SwapSchedule, UpdateFields
from rundown.participant import SCHEDULE_FIELDS, Participant
from rundown.pdf import generate_rundown_pdf


class Namelist(Group):
    """
    The competition roster and its configuration.

    Owns events, divisions, participants, entry-code prefixes, event start
    times and rundown settings. Derived views (hierarchy, teams, heats,
    entry codes) are rebuilt from these collections on every access, so
    callers re-read them after any mutation.

    Attributes:
        events (list[EventConfig]): Events in competition order.
        divisions (list[DivisionConfig]): Divisions in display order.
        participants (list[Participant]): Roster rows in store order.
        entry_codes (dict[str, str]): "EVENT|DIVISION" -> entry-code prefix.
        event_start_times (dict[str, str]): Event code -> HH:MM.
        default_rundown (RundownConfig): Settings for events without an override.
        rundown_overrides (dict[str, RundownConfig]): Per-event settings.
        history (HistoryLedger): Single-slot undo ledger.
    """

    def __init__(
        self,
        events=None,
        divisions=None,
        participants=None,
        entry_codes=None,
        event_start_times=None,
        default_rundown=None,
        rundown_overrides=None,
    ):
        self.events = (
            list(events)
            if events is not None
            else [EventConfig(**e) for e in utils.DEFAULT_EVENTS]
        )
        self.divisions = (
            list(divisions)
            if divisions is not None
            else [DivisionConfig(**d) for d in utils.DEFAULT_DIVISIONS]
        )
        self.participants = list(participants or [])
        self.entry_codes = dict(entry_codes or {})
        self.event_start_times = dict(event_start_times or {})
        self.default_rundown = default_rundown or RundownConfig()
        self.rundown_overrides = dict(rundown_overrides or {})
        self.history = HistoryLedger()

    def __repr__(self):
        return f"Namelist({len(self.participants)} participants)"

    # =========================================================================
    # roster

    def add_participant(self, participant: Participant) -> None:
        self.participants.append(participant)

    def upsert_participants(self, batch: list[Participant]) -> None:
        """
        Inserts or replaces participants by id.

        Existing rows with an incoming id are removed from their old
        positions, then the batch is appended in its own order.
        """
        incoming_ids = {p.id for p in batch}
        self.participants = [p for p in self.participants if p.id not in incoming_ids]
        self.participants.extend(batch)

    def clear_participants(self) -> None:
        self.participants = []

    def wipe_all_data(self) -> None:
        """Removes all participants. Entry codes and rundown settings are kept."""
        self.participants = []

    def get_participants_by_event(self, event_code: str, division_name: str):
        return [
            p
            for p in self.participants
            if p.event_code == event_code and p.division == division_name
        ]

    def delete_team(self, team_name: str) -> None:
        self.participants = [
            p
            for p in self.participants
            if (p.team or utils.INDEPENDENT_TEAM) != team_name
        ]

    # =========================================================================
    # events and divisions

    def get_event(self, event_code: str):
        for event in self.events:
            if event.code == event_code:
                return event
        return None

    def get_division(self, division_name: str):
        for division in self.divisions:
            if division.name == division_name:
                return division
        return None

    def add_event(self, event: EventConfig) -> None:
        if self.get_event(event.code):
            raise ValueError(f"Event {event.code} already exists")
        self.events.append(event)

    def delete_event(self, event_code: str) -> None:
        """Removes an event with its rundown override and entry-code prefixes."""
        self.events = [e for e in self.events if e.code != event_code]
        self.rundown_overrides.pop(event_code, None)
        for key in list(self.entry_codes):
            parts = utils.split_entry_code_key(key)
            if parts and parts[0] == event_code:
                del self.entry_codes[key]

    def add_division(self, division: DivisionConfig) -> None:
        if self.get_division(division.name):
            raise ValueError(f"Division {division.name} already exists")
        self.divisions.append(division)

    def delete_division(self, division_name: str) -> None:
        self.divisions = [d for d in self.divisions if d.name != division_name]
        self.sanitize()

    def rename_division(self, old_name: str, new_name: str) -> None:
        """
        Renames a division everywhere it is referenced.

        Participants, event allow-lists and entry-code keys are rewritten
        before sanitizing, so nothing that pointed at the old name is lost.
        """
        if not new_name or old_name == new_name:
            return

        division = self.get_division(old_name)
        if division:
            division.name = new_name

        for p in self.participants:
            if p.division == old_name:
                p.division = new_name

        for event in self.events:
            if event.allowed_divisions:
                event.allowed_divisions = [
                    new_name if name == old_name else name
                    for name in event.allowed_divisions
                ]

        for key in list(self.entry_codes):
            parts = utils.split_entry_code_key(key)
            if parts and parts[0] and parts[1] == old_name:
                self.entry_codes[utils.entry_code_key(parts[0], new_name)] = (
                    self.entry_codes.pop(key)
                )

        self.sanitize()

    def sanitize(self) -> None:
        """
        Drops references to divisions that no longer exist.

        Cleans event allow-lists, clears participant division fields, and
        removes entry-code prefixes keyed to a missing division.
        """
        valid_names = {d.name for d in self.divisions}

        for event in self.events:
            if event.allowed_divisions:
                event.allowed_divisions = [
                    name for name in event.allowed_divisions if name in valid_names
                ]

        for p in self.participants:
            if p.division and p.division not in valid_names:
                p.division = ""

        for key in list(self.entry_codes):
            parts = utils.split_entry_code_key(key)
            if parts and parts[1] and parts[1] not in valid_names:
                del self.entry_codes[key]

    # =========================================================================
    # entry codes and start times

    def set_entry_code(self, event_code: str, division_name: str, code: str) -> None:
        self.entry_codes[utils.entry_code_key(event_code, division_name)] = code

    def get_entry_code(self, event_code: str, division_name: str) -> str:
        return self.entry_codes.get(utils.entry_code_key(event_code, division_name)) or ""

    def set_event_start_time(self, event_code: str, time: str) -> None:
        self.event_start_times[event_code] = time

    def get_event_start_time(self, event_code: str):
        return self.event_start_times.get(event_code)

    def participant_entry_code(self, participant: Participant) -> str:
        """Returns the participant's entry code, e.g. "A001", or "-"."""
        return get_participant_entry_code(participant, self.hierarchy)

    # =========================================================================
    # derived views

    @property
    def hierarchy(self):
        """Event -> division -> participants, rebuilt on each access."""
        return build_hierarchy(
            self.events, self.divisions, self.participants, self.entry_codes
        )

    @property
    def teams(self):
        """Team -> participants in first-come-first-served order."""
        return build_teams(self.participants)

    def get_heats(self, event_code: str | None = None):
        """
        Builds heat views from the current schedule.

        Args:
            event_code (str or None): Limit to participants of one event.

        Returns:
            list[Heat]: Heats ordered by number, participants ordered by station.
        """
        heats = {}
        scheduled = [
            p
            for p in self.participants
            if p.heat is not None and (not event_code or p.event_code == event_code)
        ]
        for p in sorted(scheduled, key=lambda p: (p.heat, p.station or 0)):
            if p.heat not in heats:
                heats[p.heat] = Heat(p.heat, p.schedule_time)
            heats[p.heat].add_participant(p)
        return list(heats.values())

    # =========================================================================
    # rundown

    def get_rundown_config(self, event_code: str | None = None) -> RundownConfig:
        """Returns the event's override if one exists, else the default settings."""
        if event_code:
            override = self.rundown_overrides.get(event_code.strip())
            if override is not None:
                return override
        return self.default_rundown

    def update_rundown_config(
        self, config: RundownConfig, event_code: str | None = None
    ) -> None:
        """Stores `config` as the event's override, or as the default when no event is given."""
        config = config.model_copy()
        if event_code:
            self.rundown_overrides[event_code.strip()] = config
        else:
            self.default_rundown = config

    def clear_rundown(self, event_code: str | None = None) -> None:
        for p in self.participants:
            if not event_code or p.event_code == event_code:
                p.clear_schedule()

    def generate_rundown(self, event_code: str | None = None, algorithm="greedy"):
        """
        Assigns heat, station and time to every participant in scope.

        Args:
            event_code (str or None): Reschedule only this event, appending its
                heats after those already scheduled for other events.
            algorithm (str): Registered generator name.
        """
        get_generator(algorithm)().generate(self, event_code)

    # =========================================================================
    # manual edits and undo

    def update_participant(self, id: str, record_history=True, **updates) -> None:
        """
        Sets fields on a participant, recording the previous values for undo.

        Raises:
            ValueError: If the participant or a field name is unknown.
        """
        p = self.get_participant_by_id(id)
        unknown = set(updates) - set(Participant.model_fields)
        if unknown:
            raise ValueError(f"Unknown participant field(s): {sorted(unknown)}")

        if record_history:
            previous = {key: getattr(p, key) for key in updates}
            self.history.push(
                f"Update {p.name}", UpdateFields(participant_id=id, previous=previous)
            )

        for key, value in updates.items():
            setattr(p, key, value)

    def swap_participants(self, id1: str, id2: str, record_history=True) -> None:
        """Exchanges heat, station and time between two participants."""
        p1 = self.get_participant_by_id(id1)
        p2 = self.get_participant_by_id(id2)

        if record_history:
            self.history.push(
                f"Swap {p1.name} <-> {p2.name}",
                SwapSchedule(first_id=id1, second_id=id2),
            )

        first, second = p1.schedule_snapshot(), p2.schedule_snapshot()
        for field in SCHEDULE_FIELDS:
            setattr(p1, field, second[field])
            setattr(p2, field, first[field])

    def undo(self):
        """
        Reverts the most recent manual edit, if any.

        Returns:
            str or None: Description of the reverted edit.
        """
        entry = self.history.pop()
        if entry is None:
            return None
        entry.command.apply(self)
        return entry.description

    # =========================================================================
    # exports

    def get_rundown_rows(self, event_code: str | None = None):
        """
        Returns one dict per scheduled participant, in heat then station order.

        Return format is for input to to_csv and to_pdf.
        """
        hierarchy = self.hierarchy
        rows = []
        for heat in self.get_heats(event_code):
            for p in heat.participants:
                rows.append(
                    {
                        "heat": heat.number,
                        "time": p.schedule_time or "",
                        "station": p.station,
                        "code": get_participant_entry_code(p, hierarchy),
                        "name": " / ".join(utils.split_names(p.name)) or p.name,
                        "team": p.team,
                        "event": p.event_code,
                        "division": p.division,
                    }
                )
        return rows

    def to_csv(self, path, event_code: str | None = None) -> None:
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(
                f,
                fieldnames=[
                    "heat",
                    "time",
                    "station",
                    "code",
                    "name",
                    "team",
                    "event",
                    "division",
                ],
            )
            writer.writeheader()
            writer.writerows(self.get_rundown_rows(event_code))

    def to_pdf(self, path, title: str, event_code: str | None = None) -> bytes:
        """Generate the rundown PDF, write it to `path` and return its bytes."""
        return generate_rundown_pdf(self, title, event_code=event_code, output_path=path)
