import re

# TODO: load these catalogues from the project YAML instead of hardcoding them
DEFAULT_DIVISIONS = [
    {"name": "7-11 FEMALE", "prefix": "A"},
    {"name": "12-15 FEMALE", "prefix": "B"},
    {"name": "16+ FEMALE", "prefix": "C"},
    {"name": "7-11 MALE", "prefix": "D"},
    {"name": "12-15 MALE", "prefix": "E"},
    {"name": "16+ MALE", "prefix": "F"},
    {"name": "OPEN+ FEMALE", "prefix": "G"},
    {"name": "OPEN+ MALE", "prefix": "H"},
]

DEFAULT_EVENTS = [
    {"code": "SRSS", "name": "Single Rope Speed Sprint"},
    {"code": "SRSE", "name": "Single Rope Speed Endurance"},
    {"code": "SRSR", "name": "Single Rope Speed Relay"},
    {"code": "SRDR", "name": "Single Rope Double Unders Relay"},
    {"code": "SRJJ", "name": "Single Rope Jump Jump"},
    {"code": "SRJJR", "name": "Single Rope Jump Jump Relay"},
    {"code": "SRTU", "name": "Single Rope Triple Unders"},
    {"code": "DDSS", "name": "Double Dutch Speed Sprint"},
    {"code": "DDSR", "name": "Double Dutch Speed Relay"},
    {"code": "SRIF", "name": "Single Rope Individual Freestyle"},
    {"code": "SRIF_LEVEL 1", "name": "Single Rope Individual Freestyle Level 1"},
    {"code": "SRIF_LEVEL 2", "name": "Single Rope Individual Freestyle Level 2"},
    {"code": "SRPF", "name": "Single Rope Pair Freestyle"},
    {"code": "SRTF", "name": "Single Rope Team Freestyle"},
    {"code": "DDPF", "name": "Double Dutch Pair Freestyle"},
    {"code": "DDTF", "name": "Double Dutch Team Freestyle"},
]

DEFAULT_START_TIME = "09:00"
DEFAULT_HEAT_DURATION = 2  # minutes
DEFAULT_STATION_COUNT = 12
DEFAULT_ROWS_PER_PAGE = 30

UNASSIGNED_CODE = "-"
INDEPENDENT_TEAM = "INDEPENDENT"
ENTRY_CODE_SEPARATOR = "|"

NAME_DELIMITERS = re.compile(r"[\r\n,]+")
TIME_PATTERN = re.compile(r"^\d{1,2}:\d{2}$")
MINUTES_PER_DAY = 24 * 60


def norm(value: str | None) -> str:
    """Strip surrounding whitespace, treating None as an empty string."""
    return (value or "").strip()


def entry_code_key(event_code: str, division_name: str) -> str:
    """
    Builds the flat entry-code map key for an (event, division) pair.

    Args:
        event_code (str): Event code, e.g. "SRSS".
        division_name (str): Division name, e.g. "7-11 FEMALE".

    Returns:
        str: Key of the form "SRSS|7-11 FEMALE".
    """
    return f"{event_code}{ENTRY_CODE_SEPARATOR}{division_name}"


def split_entry_code_key(key: str) -> tuple[str, str] | None:
    """Returns (event_code, division_name), or None if the key is not a two-part key."""
    parts = key.split(ENTRY_CODE_SEPARATOR)
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


def format_entry_code(prefix: str, index: int) -> str:
    """Combines a division prefix and an ordinal into a code such as A007."""
    return f"{prefix}{index:03d}"


def add_minutes(time_str: str, minutes: int) -> str:
    """
    Advances an HH:MM wall-clock value by a number of minutes.

    Non-numeric hour or minute parts are read as zero. The result wraps
    around midnight.

    Args:
        time_str (str): Clock value, e.g. "09:58".
        minutes (int): Minutes to add.

    Returns:
        str: New clock value, e.g. "10:00".
    """
    parts = (time_str or "").split(":")
    hours = _to_int(parts[0]) if parts else 0
    mins = _to_int(parts[1]) if len(parts) > 1 else 0
    total = (hours * 60 + mins + int(minutes)) % MINUTES_PER_DAY
    return f"{total // 60:02d}:{total % 60:02d}"


def _to_int(value: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def split_names(name_field: str | None) -> list[str]:
    """
    Splits a participant name field into individual person names.

    Team entries carry several names separated by newlines or commas.
    Tokens of one character or less are dropped as stray punctuation.

    Args:
        name_field (str): Raw name field.

    Returns:
        list[str]: Trimmed person names in their original order.
    """
    names = []
    for token in NAME_DELIMITERS.split(name_field or ""):
        clean = token.strip()
        if clean and len(clean) > 1:
            names.append(clean)
    return names


def normalize_divisions(raw_divisions: list | None) -> list[dict[str, str]]:
    """Normalize persisted divisions into {name, prefix} records.

    Older documents stored divisions as plain strings. Each such string is
    migrated to a record, taking the prefix from the default catalogue when
    the name matches one of its divisions, and an empty prefix otherwise.

    Args:
        raw_divisions: Divisions as read from a persisted document.

    Returns:
        list[dict[str, str]]: Division records ready for validation.
    """
    records: list[dict[str, str]] = []
    if not raw_divisions:
        return records

    defaults = {d["name"]: d for d in DEFAULT_DIVISIONS}
    for division in raw_divisions:
        if isinstance(division, str):
            default = defaults.get(division)
            records.append(
                dict(default) if default else {"name": division, "prefix": ""}
            )
        elif isinstance(division, dict):
            records.append(
                {
                    "name": str(division.get("name", "")),
                    "prefix": str(division.get("prefix", "") or ""),
                }
            )
        else:
            raise ValueError(f"Unrecognized division record: {division!r}")

    return records
