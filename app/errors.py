"""Exception hierarchy shared by the task initiator, worker and storage layer."""


class GatewayError(Exception):
    """Base class for all errors raised by the gateway."""


class EffectValidationError(GatewayError):
    """Client input rejected before any task is created."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class ConfigurationError(GatewayError):
    """A required credential or setting is missing."""


class MediaFetchError(GatewayError):
    """Source media could not be downloaded or encoded."""


class UpstreamError(GatewayError):
    """The generation vendor returned an unusable response."""

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code


class StorageError(GatewayError):
    """Uploading an artifact to object storage failed."""
