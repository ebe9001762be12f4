class TablePrepError(Exception):
    """Base class for every error raised by tableprep."""


class SourceConnectionError(TablePrepError, ConnectionError):
    """The external source could not be reached or opened."""


class SchemaError(TablePrepError):
    """A requested table does not exist in the source."""


class ConfigError(TablePrepError, ValueError):
    """A caller-supplied table or sort request is invalid."""


class ColumnError(ConfigError):
    """A sort was requested over a column the dataset does not have."""


class QueryError(TablePrepError):
    """The source rejected or failed the executed query."""
