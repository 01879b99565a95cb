"""Exceptions raised by CODA.

`LoadError` and `EmptyDatasetError` are fatal: the engine cannot start without
a dataset. `ValidationError` is recoverable: the previous window stays active.
"""


class CodaError(Exception):
    """Base class for all CODA errors."""


class LoadError(CodaError):
    """The source could not be read or contains a malformed row."""


class EmptyDatasetError(LoadError):
    """The source was readable but produced zero usable rows."""


class ValidationError(CodaError, ValueError):
    """A requested analysis window lies outside the valid date range."""
