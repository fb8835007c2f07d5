from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from rundown import utils


class DivisionConfig(BaseModel):
    """A competition division and the prefix used to build its entry codes."""

    name: str = Field(..., description="Division display name, unique key.")
    prefix: str = Field("", description="Short prefix for entry codes, e.g. 'A'.")


class EventConfig(BaseModel):
    """A competition event and the divisions it is open to."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    code: str = Field(..., description="Event code, unique key.")
    name: str = Field("", description="Event display name.")
    allowed_divisions: list[str] | None = Field(
        None,
        description="Division names open to this event. Empty or None means all.",
    )

    @property
    def is_open(self) -> bool:
        return not self.allowed_divisions

    def allows(self, division_name: str) -> bool:
        return self.is_open or division_name in self.allowed_divisions


class RundownConfig(BaseModel):
    """Heat timing and capacity settings for one event, or the default."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    start_time: str = Field(
        utils.DEFAULT_START_TIME, description="Clock time of the first heat (HH:MM)."
    )
    heat_duration: int = Field(
        utils.DEFAULT_HEAT_DURATION, description="Length of one heat in minutes."
    )
    station_count: int = Field(
        utils.DEFAULT_STATION_COUNT, description="Entries competing per heat."
    )
    rows_per_page: int = Field(
        utils.DEFAULT_ROWS_PER_PAGE, description="Rows per printed rundown page."
    )

    # malformed values fall back to defaults rather than failing a run

    @field_validator("start_time", mode="before")
    @classmethod
    def _coerce_start_time(cls, value):
        value = utils.norm(value if isinstance(value, str) else None)
        return value if utils.TIME_PATTERN.match(value) else utils.DEFAULT_START_TIME

    @field_validator("heat_duration", mode="before")
    @classmethod
    def _coerce_heat_duration(cls, value):
        return _coerce_int(value, utils.DEFAULT_HEAT_DURATION, minimum=0)

    @field_validator("station_count", mode="before")
    @classmethod
    def _coerce_station_count(cls, value):
        return _coerce_int(value, utils.DEFAULT_STATION_COUNT, minimum=1)

    @field_validator("rows_per_page", mode="before")
    @classmethod
    def _coerce_rows_per_page(cls, value):
        return _coerce_int(value, utils.DEFAULT_ROWS_PER_PAGE, minimum=1)


def _coerce_int(value, default: int, minimum: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= minimum else default


class ProjectConfig(BaseModel):
    """Configuration data for loading a competition namelist."""

    name: str = Field("rundown", description="Name of the competition.")
    data_file: Path = Field(..., description="Path to the JSON namelist document.")
    roster_csv: Path | None = Field(
        None, description="Optional roster CSV to merge into the namelist."
    )
    output_dir: Path | None = Field(
        None, description="Folder for exported rundown files."
    )
    rundown: RundownConfig = Field(
        default_factory=RundownConfig, description="Default rundown settings."
    )
    event_rundowns: dict[str, RundownConfig] = Field(
        default_factory=dict, description="Per-event rundown setting overrides."
    )
    entry_codes: dict[str, dict[str, str]] = Field(
        default_factory=dict,
        description="Entry code prefixes keyed by event code, then division name.",
    )

    def validate_paths(self) -> None:
        """Ensure the roster path, if given, exists and is a file."""
        if self.roster_csv is None:
            return
        if not self.roster_csv.exists():
            raise FileNotFoundError(f"roster_csv does not exist: {self.roster_csv}")
        if not self.roster_csv.is_file():
            raise ValueError(f"roster_csv is not a file: {self.roster_csv}")


def resolve_config_paths(config_data: dict, config_path: Path) -> dict:
    """Resolve relative data paths against the configuration file directory.

    Args:
        config_data: Raw configuration dictionary.
        config_path: Path to the configuration file.

    Returns:
        dict: Configuration data with resolved paths.
    """
    if not config_data or not config_path:
        return config_data or {}

    resolved_data = dict(config_data)
    base_dir = config_path.parent
    for key in ["data_file", "roster_csv", "output_dir"]:
        value = resolved_data.get(key)
        if not value:
            continue
        try:
            path = Path(value)
        except TypeError:
            continue
        if not path.is_absolute():
            resolved_data[key] = str((base_dir / path).resolve())
    return resolved_data
