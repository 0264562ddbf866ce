"""
Error types shared by the services and API layers.

The API layer maps these to HTTP status codes:

    ParameterValidationError -> 400
    UpstreamFetchError       -> 500 (or a null stat inside the monthly summary)
    ConfigurationError       -> 500
"""


class MeasureEffectError(Exception):
    """Base class for all errors raised by this package."""


class ParameterValidationError(MeasureEffectError):
    """A required request parameter is missing or malformed."""


class UpstreamFetchError(MeasureEffectError):
    """
    Reading from an external system failed.

    Raised by the data source when the database query fails and by the
    webhook forwarder when the remote call fails or returns an error.
    """


class ConfigurationError(MeasureEffectError):
    """A setting required by the requested operation is not configured."""
