class RundownError(Exception):
    """Base class for errors raised by the rundown package."""

    pass


class OutputFolderNotSetError(RundownError):
    """Raised when a document is saved without a destination folder."""

    pass


class StorageError(RundownError):
    """Raised when a namelist document cannot be written."""

    pass
