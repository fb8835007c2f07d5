import csv

from rundown.participant import Participant

# csv header (lowercased) -> participant field
COLUMN_MAP = {
    "id": "id",
    "name": "name",
    "team": "team",
    "event": "event_code",
    "eventcode": "event_code",
    "event_code": "event_code",
    "division": "division",
    "notes": "notes",
    "customid": "custom_id",
    "custom_id": "custom_id",
    "groupid": "group_id",
    "group_id": "group_id",
}


def load_roster_csv(roster_csv):
    """
    Reads roster rows from a CSV file.

    Header names are matched case-insensitively. Rows without a name are
    skipped, and rows without an id get a generated one. Empty optional
    cells become None.

    Args:
        roster_csv (str or Path): Path to the roster CSV.

    Returns:
        list[Participant]: Participants in file order.
    """
    participants = []
    with open(roster_csv, newline="", encoding="utf-8-sig") as file:
        reader = csv.DictReader(file)
        for row in reader:
            record = {}
            for column, value in row.items():
                field = COLUMN_MAP.get((column or "").strip().lower())
                if field is None:
                    continue
                value = (value or "").strip()
                if value:
                    record[field] = value

            if not record.get("name"):
                continue
            participants.append(Participant(**record))

    return participants
