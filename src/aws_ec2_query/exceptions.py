class EC2QueryWarning(UserWarning): ...


class BaseEC2QueryException(Exception):
    """Top-level exception to capture client-related errors."""

    ...


class ConfigurationError(BaseEC2QueryException, ValueError):
    """Client configuration is missing a required value or holds an invalid one."""

    ...


class UnknownFormatError(BaseEC2QueryException, RuntimeError):
    """A return format was reached that has no conversion."""

    ...


class ResponseParseError(BaseEC2QueryException, ValueError):
    """The response body was not a well-formed XML document."""

    ...
