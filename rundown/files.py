"""Placement of generated documents into per-person folders."""

import logging
import re
from pathlib import Path

from rundown.exceptions import OutputFolderNotSetError

logger = logging.getLogger(__name__)

FORBIDDEN_CHARACTERS = re.compile(r'[\\/:*?"<>|]')
FOLDER_NAME_SEPARATOR = "&"


def sanitize(value: str) -> str:
    """Strips characters that are not allowed in file or folder names."""
    return FORBIDDEN_CHARACTERS.sub("", value or "").strip()


def find_person_folder(base_dir: Path, names: set[str]):
    """
    Finds an existing subfolder whose "&"-separated parts equal `names`.

    Args:
        base_dir (Path): Folder to search.
        names (set[str]): Sanitized person names.

    Returns:
        Path or None: The matching folder, if any.
    """
    if not base_dir.exists():
        return None
    try:
        for entry in sorted(base_dir.iterdir()):
            if not entry.is_dir():
                continue
            parts = {part.strip() for part in entry.name.split(FOLDER_NAME_SEPARATOR)}
            if parts == names:
                return entry
    except OSError as e:
        logger.error("Error reading output path %s: %s", base_dir, e)
    return None


def save_document(base_dir, filename: str, names, data: bytes) -> Path:
    """
    Writes a document into the folder belonging to a set of people.

    An existing subfolder is reused when its name lists exactly the same
    people in any order; otherwise one is created with the names sorted and
    joined by " & ".

    Args:
        base_dir (str or Path or None): Output folder.
        filename (str): Document file name, sanitized before use.
        names (Iterable[str]): Names of the people the document belongs to.
        data (bytes): Document content.

    Returns:
        Path: Path of the written file.

    Raises:
        OutputFolderNotSetError: If `base_dir` is empty.
    """
    if not base_dir:
        raise OutputFolderNotSetError("Output folder not set")
    base_dir = Path(base_dir)

    name_set = {sanitize(name) for name in names}
    name_set.discard("")

    target_dir = find_person_folder(base_dir, name_set)
    if target_dir is None:
        folder_name = f" {FOLDER_NAME_SEPARATOR} ".join(sorted(name_set))
        target_dir = base_dir / folder_name

    target_dir.mkdir(parents=True, exist_ok=True)
    file_path = target_dir / sanitize(filename)
    file_path.write_bytes(data)
    return file_path
