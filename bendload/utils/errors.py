"""
Load pipeline exceptions

Fatal errors (source, stream, schema, table lookup, config) stop the load.
DispatchError is caught per batch and turned into a failed BatchOutcome.
"""


class LoadError(Exception):
    """Base class for every bendload error"""


class ConfigError(LoadError):
    """Unsupported profile, format or invalid setting"""


class SourceError(LoadError):
    """Source path missing, unreadable, or remote fetch failed"""


class StreamError(LoadError):
    """I/O failure while reading the next line of an opened source"""


class InvalidSchema(LoadError):
    """Schema string is not a comma-separated list of name:type pairs"""


class TableNotFound(LoadError):
    """Target table is absent and no schema was given to create it"""

    def __init__(self, table: str):
        super().__init__(f"table {table} not found")
        self.table = table


class QueryError(LoadError):
    """Statement failed at the transport or at the query endpoint"""


class DispatchError(LoadError):
    """One batch's INSERT statement was rejected"""

    def __init__(self, table: str, cause: Exception):
        super().__init__(f"cannot insert data into {table}, error: {cause}")
        self.table = table
        self.cause = cause
