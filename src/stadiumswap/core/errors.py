"""Exception hierarchy for Stadium Swap.

Every error raised by the core derives from :class:`StadiumSwapError` so the
UI layer can tell expected, user-facing failures apart from programming
errors. The message of each exception is intended to be shown to the user
as-is.
"""


class StadiumSwapError(Exception):
    """Base class for all Stadium Swap errors."""


class ValidationError(StadiumSwapError):
    """User-friendly validation error.

    Raised when an uploaded file is rejected before any generation is
    attempted. The message is intended to be displayed directly to the user.
    """


class NotAnImageError(ValidationError):
    """The uploaded file does not declare an image content type."""

    def __init__(self, message: str = "Please upload an image file.") -> None:
        super().__init__(message)


class FileTooLargeError(ValidationError):
    """The uploaded file exceeds the configured size limit."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        limit_mb = limit / (1024 * 1024)
        super().__init__(
            f"File is too large. Please upload an image smaller than {limit_mb:g}MB."
        )


class DecodeError(ValidationError):
    """The uploaded file could not be turned into a base64 image payload."""

    def __init__(self, message: str = "The image could not be read. Please try another file.") -> None:
        super().__init__(message)


class CredentialMissingError(StadiumSwapError):
    """No usable API key is available for the generation API."""

    def __init__(self, message: str = "No API key selected.") -> None:
        super().__init__(message)


class GenerationError(StadiumSwapError):
    """Base class for failures of the outbound generation call."""


class NoImageProducedError(GenerationError):
    """The model answered but returned no inline image data."""

    def __init__(
        self,
        message: str = (
            "No image was generated. The model might have refused the request "
            "or returned text only."
        ),
    ) -> None:
        super().__init__(message)


class UpstreamError(GenerationError):
    """Transport or API-level failure reported by the generation service."""

    def __init__(self, message: str = "Failed to transform image.") -> None:
        super().__init__(message or "Failed to transform image.")
