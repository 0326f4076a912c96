from __future__ import annotations


class CompositeStreamUserError(Exception):
    exit_code: int


class CompositeStreamBadParameterError(CompositeStreamUserError):
    exit_code = 2


class CompositeStreamFileNotFoundError(CompositeStreamUserError):
    exit_code = 3


class CompositeStreamConstructionError(CompositeStreamUserError):
    """
    A source could not be materialized or measured while opening a stream
    """

    exit_code = 4


class CompositeStreamMisuseError(CompositeStreamUserError, ValueError):
    """
    The stream was accessed without being initialized through its factory,
    or after it was closed
    """

    exit_code = 5
