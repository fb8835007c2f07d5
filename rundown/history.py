"""Single-slot undo ledger.

Each history entry stores the inverse of a manual edit as plain data, so the
ledger can be dumped and reloaded without captured state.
"""

from typing import Literal, Union

from pydantic import BaseModel, Field


class UpdateFields(BaseModel):
    """Restores previous field values on one participant."""

    kind: Literal["update"] = "update"
    participant_id: str
    previous: dict = Field(default_factory=dict)

    def apply(self, namelist) -> None:
        namelist.update_participant(
            self.participant_id, record_history=False, **self.previous
        )


class SwapSchedule(BaseModel):
    """Swaps heat, station and time between two participants."""

    kind: Literal["swap"] = "swap"
    first_id: str
    second_id: str

    def apply(self, namelist) -> None:
        namelist.swap_participants(self.first_id, self.second_id, record_history=False)


Command = Union[UpdateFields, SwapSchedule]


class HistoryEntry(BaseModel):
    description: str
    command: Command = Field(..., discriminator="kind")


class HistoryLedger:
    """
    Holds at most one history entry.

    Pushing replaces any existing entry, so a second edit discards the
    ability to undo the first.
    """

    def __init__(self):
        self._entry = None

    def __len__(self):
        return 0 if self._entry is None else 1

    def __bool__(self):
        return self._entry is not None

    @property
    def last(self):
        """Returns the pending entry without removing it, or None."""
        return self._entry

    def push(self, description: str, command: Command) -> None:
        self._entry = HistoryEntry(description=description, command=command)

    def pop(self):
        """Removes and returns the pending entry, or None."""
        entry, self._entry = self._entry, None
        return entry

    def clear(self) -> None:
        self._entry = None

    def to_list(self) -> list[dict]:
        return [] if self._entry is None else [self._entry.model_dump()]

    @classmethod
    def from_list(cls, records: list[dict] | None):
        ledger = cls()
        if records:
            ledger._entry = HistoryEntry.model_validate(records[-1])
        return ledger
