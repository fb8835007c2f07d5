"""Persistence of a Namelist as a single JSON document.

Document fields: events, divisions, participants, entryCodes,
eventStartTimes and rundownConfigs.
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from rundown import utils
from rundown.config import DivisionConfig, EventConfig, RundownConfig
from rundown.exceptions import StorageError
from rundown.namelist import Namelist
from rundown.participant import Participant

logger = logging.getLogger(__name__)


class RundownConfigsDocument(BaseModel):
    """Default rundown settings plus per-event overrides."""

    default: RundownConfig | None = None
    legacy_default: RundownConfig | None = Field(None, alias="GLOBAL")
    events: dict[str, RundownConfig] | None = None


class NamelistDocument(BaseModel):
    """
    Shape of a saved namelist document.

    Every field is optional; a missing or empty field keeps the namelist
    default. Divisions stored as plain strings are migrated to
    {name, prefix} records, and null or empty code and start-time values
    are dropped.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    events: list[EventConfig] | None = None
    divisions: list[DivisionConfig] | None = None
    participants: list[Participant] | None = None
    entry_codes: dict[str, str] | None = None
    event_start_times: dict[str, str] | None = None
    rundown_configs: RundownConfigsDocument | None = None

    @field_validator("divisions", mode="before")
    @classmethod
    def _migrate_divisions(cls, value):
        if isinstance(value, list):
            return utils.normalize_divisions(value)
        return value

    @field_validator("entry_codes", "event_start_times", mode="before")
    @classmethod
    def _drop_empty_values(cls, value):
        if isinstance(value, dict):
            return {
                key: str(item) if isinstance(item, (int, float)) else item
                for key, item in value.items()
                if item not in (None, "")
            }
        return value


def to_document(namelist: Namelist) -> dict:
    """Serializes a namelist into a JSON-ready dict."""
    document = NamelistDocument(
        events=namelist.events,
        divisions=namelist.divisions,
        participants=namelist.participants,
        entry_codes=dict(namelist.entry_codes),
        event_start_times=dict(namelist.event_start_times),
        rundown_configs=RundownConfigsDocument(
            default=namelist.default_rundown,
            events=dict(namelist.rundown_overrides),
        ),
    )
    return document.model_dump(by_alias=True, exclude_none=True)


def from_document(data) -> Namelist:
    """
    Builds a namelist from a persisted document.

    Missing fields keep their defaults. A legacy "GLOBAL" rundown setting
    is read as the default. The result is sanitized.

    Raises:
        ValidationError: If the document or one of its records is malformed.
    """
    document = NamelistDocument.model_validate(data)
    namelist = Namelist()

    if document.events:
        namelist.events = document.events
    if document.divisions:
        namelist.divisions = document.divisions
    if document.participants:
        namelist.participants = document.participants
    if document.entry_codes:
        namelist.entry_codes = document.entry_codes
    if document.event_start_times:
        namelist.event_start_times = document.event_start_times

    configs = document.rundown_configs
    if configs:
        default = configs.default or configs.legacy_default
        if default:
            namelist.default_rundown = default
        namelist.rundown_overrides = dict(configs.events or {})

    namelist.sanitize()
    return namelist


def load_namelist(path) -> Namelist:
    """
    Loads a namelist document from disk.

    A missing file gives a fresh namelist. A malformed document is logged
    and also gives a fresh namelist, so startup never fails on bad data.

    Args:
        path (str or Path): Path to the JSON document.

    Returns:
        Namelist: The loaded namelist.
    """
    path = Path(path)
    if not path.exists():
        return Namelist()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return from_document(data)
    except (OSError, ValueError, ValidationError) as e:
        logger.error("Failed to load saved data from %s: %s", path, e)
        return Namelist()


def save_namelist(namelist: Namelist, path) -> Path:
    """
    Writes a namelist document to disk.

    Raises:
        StorageError: If the file cannot be written.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(to_document(namelist), f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise StorageError(f"Could not save namelist to {path}: {e}") from e
    return path
