class StorageError(Exception):
    """Unexpected failure talking to the SQLite store."""


class StorageUnavailable(StorageError):
    """The database file cannot be opened or created."""


class InvalidArgument(ValueError):
    """A caller passed a semantically invalid value (amount, date, name, type)."""


class NotFound(LookupError):
    """An update or delete referenced an id that does not exist."""
