"""Tests for the namelist store: views, sanitization, settings and undo."""

import pytest

from rundown.config import DivisionConfig, EventConfig, RundownConfig
from rundown.history import HistoryLedger, SwapSchedule
from rundown.namelist import Namelist
from rundown.participant import Participant
from rundown.utils import add_minutes, normalize_divisions, split_names


def make(id, event_code="SRSS", division="16+ FEMALE", team="", group_id=None, name=None):
    return Participant(
        id=id,
        name=name or id,
        team=team,
        event_code=event_code,
        division=division,
        group_id=group_id,
    )


class TestDefaults:
    """A fresh namelist carries the default catalogue."""

    def test_default_catalogue(self):
        namelist = Namelist()
        assert len(namelist.events) == 16
        assert namelist.events[0].code == "SRSS"
        assert [d.prefix for d in namelist.divisions] == list("ABCDEFGH")
        assert namelist.participants == []

    def test_default_rundown_settings(self):
        config = Namelist().get_rundown_config()
        assert (config.start_time, config.heat_duration) == ("09:00", 2)
        assert (config.station_count, config.rows_per_page) == (12, 30)


class TestRundownConfig:
    """Per-event overrides and malformed values."""

    def test_override_then_default(self):
        namelist = Namelist()
        namelist.update_rundown_config(RundownConfig(station_count=4), " DDSS ")

        assert namelist.get_rundown_config("DDSS").station_count == 4
        assert namelist.get_rundown_config("SRSS").station_count == 12
        assert namelist.get_rundown_config(None).station_count == 12

    def test_update_default(self):
        namelist = Namelist()
        namelist.update_rundown_config(RundownConfig(heat_duration=3))
        assert namelist.get_rundown_config("SRSS").heat_duration == 3

    def test_stored_config_is_a_copy(self):
        namelist = Namelist()
        config = RundownConfig(station_count=4)
        namelist.update_rundown_config(config, "DDSS")
        config.station_count = 9
        assert namelist.get_rundown_config("DDSS").station_count == 4

    @pytest.mark.parametrize(
        "field,value,expected",
        [
            ("station_count", "", 12),
            ("station_count", 0, 12),
            ("station_count", "6", 6),
            ("heat_duration", "abc", 2),
            ("heat_duration", 0, 0),
            ("start_time", "", "09:00"),
            ("start_time", "nine", "09:00"),
            ("rows_per_page", None, 30),
        ],
    )
    def test_malformed_values(self, field, value, expected):
        assert getattr(RundownConfig(**{field: value}), field) == expected

    def test_camel_case_aliases(self):
        config = RundownConfig.model_validate({"startTime": "10:15", "stationCount": 8})
        assert (config.start_time, config.station_count) == ("10:15", 8)


class TestHierarchy:
    """Event -> division projection."""

    def test_allow_list_filters_divisions(self):
        namelist = Namelist()
        namelist.events[0].allowed_divisions = ["16+ FEMALE", "16+ MALE"]

        srss = namelist.hierarchy[0]

        assert [b.division for b in srss.divisions] == ["16+ FEMALE", "16+ MALE"]
        assert len(namelist.hierarchy[1].divisions) == 8

    def test_unique_entry_count(self):
        namelist = Namelist()
        namelist.set_entry_code("SRSS", "16+ FEMALE", "C")
        for p in (
            make("a"),
            make("t1", group_id="T"),
            make("t2", group_id="T"),
            make("b"),
            make("x", event_code="DDSS"),
        ):
            namelist.add_participant(p)

        bucket = namelist.hierarchy[0].get_division("16+ FEMALE")

        assert bucket.count == 3
        assert bucket.total == 4
        assert bucket.entry_code == "C"
        assert [p.id for p in bucket.participants] == ["a", "t1", "t2", "b"]

    def test_hierarchy_reflects_mutations(self):
        namelist = Namelist()
        assert namelist.hierarchy[0].count == 0
        namelist.add_participant(make("a"))
        assert namelist.hierarchy[0].count == 1


class TestTeams:
    """Team projection."""

    def test_first_seen_order_and_independent(self):
        namelist = Namelist()
        namelist.add_participant(make("a", team="Zebras"))
        namelist.add_participant(make("b"))
        namelist.add_participant(make("c", team="Apes"))
        namelist.add_participant(make("d", team="Zebras"))

        teams = namelist.teams

        assert [t.name for t in teams] == ["Zebras", "INDEPENDENT", "Apes"]
        assert [p.id for p in teams[0].participants] == ["a", "d"]

    def test_unique_person_count(self):
        namelist = Namelist()
        namelist.add_participant(make("a", team="Zebras", name="Amy\nBen"))
        namelist.add_participant(make("b", team="Zebras", name="Amy, Cal,\r\n x"))

        assert namelist.teams[0].count == 3
        assert namelist.teams[0].person_names == ["Amy", "Ben", "Cal"]

    def test_delete_team(self):
        namelist = Namelist()
        namelist.add_participant(make("a", team="Zebras"))
        namelist.add_participant(make("b"))

        namelist.delete_team("INDEPENDENT")

        assert [p.id for p in namelist.participants] == ["a"]


class TestRoster:
    """Roster mutations."""

    def test_upsert_moves_updated_rows_to_end(self):
        namelist = Namelist()
        namelist.upsert_participants([make("a"), make("b"), make("c")])

        namelist.upsert_participants([make("a", name="Alice"), make("d")])

        assert [p.id for p in namelist.participants] == ["b", "c", "a", "d"]
        assert namelist.participants[2].name == "Alice"

    def test_wipe_keeps_codes_and_settings(self):
        namelist = Namelist()
        namelist.set_entry_code("SRSS", "16+ FEMALE", "C")
        namelist.update_rundown_config(RundownConfig(station_count=3), "SRSS")
        namelist.add_participant(make("a"))

        namelist.wipe_all_data()

        assert namelist.participants == []
        assert namelist.get_entry_code("SRSS", "16+ FEMALE") == "C"
        assert namelist.get_rundown_config("SRSS").station_count == 3

    def test_get_participants_by_event(self):
        namelist = Namelist()
        namelist.add_participant(make("a"))
        namelist.add_participant(make("b", event_code="DDSS"))
        assert [p.id for p in namelist.get_participants_by_event("SRSS", "16+ FEMALE")] == ["a"]

    def test_event_start_times(self):
        namelist = Namelist()
        namelist.set_event_start_time("SRSS", "10:30")
        assert namelist.get_event_start_time("SRSS") == "10:30"
        assert namelist.get_event_start_time("DDSS") is None


class TestSanitization:
    """Division delete and rename keep references consistent."""

    def test_delete_division(self):
        namelist = Namelist()
        namelist.events[0].allowed_divisions = ["16+ FEMALE", "16+ MALE"]
        namelist.set_entry_code("SRSS", "16+ FEMALE", "C")
        namelist.set_entry_code("DDSS", "16+ FEMALE", "C")
        namelist.set_entry_code("DDSS", "16+ MALE", "F")
        namelist.add_participant(make("a"))
        namelist.add_participant(make("b", division="16+ MALE"))

        namelist.delete_division("16+ FEMALE")

        assert namelist.get_division("16+ FEMALE") is None
        assert namelist.participants[0].division == ""
        assert namelist.participants[1].division == "16+ MALE"
        assert not any(k.endswith("|16+ FEMALE") for k in namelist.entry_codes)
        assert namelist.entry_codes == {"DDSS|16+ MALE": "F"}
        assert namelist.events[0].allowed_divisions == ["16+ MALE"]

    def test_rename_division(self):
        namelist = Namelist()
        namelist.events[0].allowed_divisions = ["16+ FEMALE"]
        namelist.set_entry_code("SRSS", "16+ FEMALE", "C")
        namelist.add_participant(make("a"))

        namelist.rename_division("16+ FEMALE", "SENIOR FEMALE")

        assert namelist.get_division("SENIOR FEMALE").prefix == "C"
        assert namelist.participants[0].division == "SENIOR FEMALE"
        assert namelist.entry_codes == {"SRSS|SENIOR FEMALE": "C"}
        assert namelist.events[0].allowed_divisions == ["SENIOR FEMALE"]
        assert namelist.participant_entry_code(namelist.participants[0]) == "C001"

    def test_rename_to_empty_is_ignored(self):
        namelist = Namelist()
        namelist.rename_division("16+ FEMALE", "")
        assert namelist.get_division("16+ FEMALE") is not None

    def test_delete_event(self):
        namelist = Namelist()
        namelist.set_entry_code("SRSS", "16+ FEMALE", "C")
        namelist.set_entry_code("DDSS", "16+ FEMALE", "C")
        namelist.update_rundown_config(RundownConfig(station_count=3), "SRSS")

        namelist.delete_event("SRSS")

        assert namelist.get_event("SRSS") is None
        assert namelist.entry_codes == {"DDSS|16+ FEMALE": "C"}
        assert namelist.get_rundown_config("SRSS").station_count == 12

    def test_duplicate_configuration_rejected(self):
        namelist = Namelist()
        with pytest.raises(ValueError):
            namelist.add_event(EventConfig(code="SRSS", name="again"))
        with pytest.raises(ValueError):
            namelist.add_division(DivisionConfig(name="16+ MALE", prefix="Z"))


class TestUndo:
    """Single-slot undo of manual edits."""

    def create_scheduled(self):
        namelist = Namelist()
        for i, id in enumerate(("a", "b", "c", "d")):
            p = make(id)
            p.set_schedule(i + 1, 1, f"09:0{i}")
            namelist.add_participant(p)
        return namelist

    def test_swap_and_undo(self):
        namelist = self.create_scheduled()
        a, b = namelist.participants[:2]

        namelist.swap_participants("a", "b")
        assert (a.heat, a.schedule_time, b.heat) == (2, "09:01", 1)

        assert namelist.undo() == "Swap a <-> b"
        assert (a.heat, a.station, a.schedule_time) == (1, 1, "09:00")
        assert (b.heat, b.station, b.schedule_time) == (2, 1, "09:01")
        assert namelist.undo() is None

    def test_second_edit_discards_first(self):
        namelist = self.create_scheduled()
        a, b, c, d = namelist.participants

        namelist.swap_participants("a", "b")
        namelist.swap_participants("c", "d")
        namelist.undo()

        assert (c.heat, d.heat) == (3, 4)
        assert (a.heat, b.heat) == (2, 1)
        assert len(namelist.history) == 0

    def test_update_and_undo(self):
        namelist = self.create_scheduled()
        a = namelist.participants[0]

        namelist.update_participant("a", heat=9, station=4, notes="late")
        assert (a.heat, a.station, a.notes) == (9, 4, "late")

        namelist.undo()
        assert (a.heat, a.station, a.notes) == (1, 1, None)

    def test_undo_does_not_record_history(self):
        namelist = self.create_scheduled()
        namelist.update_participant("a", heat=9)
        namelist.undo()
        assert not namelist.history

    def test_unknown_ids_and_fields(self):
        namelist = self.create_scheduled()
        with pytest.raises(ValueError):
            namelist.update_participant("zzz", heat=1)
        with pytest.raises(ValueError):
            namelist.update_participant("a", colour="red")
        with pytest.raises(ValueError):
            namelist.swap_participants("a", "zzz")
        assert not namelist.history

    def test_ledger_is_plain_data(self):
        ledger = HistoryLedger()
        ledger.push("Swap a <-> b", SwapSchedule(first_id="a", second_id="b"))

        restored = HistoryLedger.from_list(ledger.to_list())

        assert restored.last.description == "Swap a <-> b"
        assert restored.last.command == SwapSchedule(first_id="a", second_id="b")


class TestUtils:
    """Helpers shared across modules."""

    @pytest.mark.parametrize(
        "start,minutes,expected",
        [("09:00", 2, "09:02"), ("09:58", 5, "10:03"), ("23:59", 2, "00:01"), ("x:y", 3, "00:03")],
    )
    def test_add_minutes(self, start, minutes, expected):
        assert add_minutes(start, minutes) == expected

    def test_split_names(self):
        assert split_names("Amy\nBen, Cal\r\n,x") == ["Amy", "Ben", "Cal"]
        assert split_names(None) == []

    def test_normalize_legacy_divisions(self):
        assert normalize_divisions(["7-11 FEMALE", "MIXED"]) == [
            {"name": "7-11 FEMALE", "prefix": "A"},
            {"name": "MIXED", "prefix": ""},
        ]
