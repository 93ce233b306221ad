"""Migration error taxonomy.

Centralized exception hierarchy for the migration pipeline. Every error
carries a ``code`` discriminant and a ``context`` dict for diagnostics.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Discriminant codes for migration errors."""

    NETWORK_ERROR = "NETWORK_ERROR"
    PARSE_ERROR = "PARSE_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FILESYSTEM_ERROR = "FILESYSTEM_ERROR"
    IMAGE_DOWNLOAD_ERROR = "IMAGE_DOWNLOAD_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class MigrationError(Exception):
    """Base exception for migration errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.context = context or {}


class NetworkError(MigrationError):
    """Raised when a remote resource cannot be fetched."""

    def __init__(
        self, message: str, url: str | None = None, status_code: int | None = None
    ) -> None:
        super().__init__(
            message, ErrorCode.NETWORK_ERROR, {"url": url, "status_code": status_code}
        )


class ParseError(MigrationError):
    """Raised when fetched content cannot be parsed."""

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message, ErrorCode.PARSE_ERROR, {"source": source})


class ValidationError(MigrationError):
    """Raised when extracted data fails an explicit validity assertion."""

    def __init__(self, message: str, field: str | None = None, value: Any = None) -> None:
        super().__init__(message, ErrorCode.VALIDATION_ERROR, {"field": field, "value": value})


class FileSystemError(MigrationError):
    """Raised when reading or writing local files fails."""

    def __init__(
        self, message: str, path: str | None = None, operation: str | None = None
    ) -> None:
        super().__init__(
            message, ErrorCode.FILESYSTEM_ERROR, {"path": path, "operation": operation}
        )


class ImageDownloadError(MigrationError):
    """Raised when an image download must be surfaced as an exception."""

    def __init__(
        self,
        message: str,
        image_url: str | None = None,
        destination_path: str | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.IMAGE_DOWNLOAD_ERROR,
            {"image_url": image_url, "destination_path": destination_path},
        )


class ContentExtractionError(MigrationError):
    """Raised when one of the concurrent extractions fails.

    The code is taken from the classified cause, so a network failure during
    extraction still reports ``NETWORK_ERROR``.
    """

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        cause: MigrationError | None = None,
    ) -> None:
        code = cause.code if cause is not None else ErrorCode.UNKNOWN_ERROR
        context: dict[str, Any] = {"stage": stage}
        if cause is not None:
            context.update(cause.context)
        super().__init__(message, code, context)
        self.cause = cause


# Fixed user-facing sentences, decoupled from the diagnostic messages.
USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.NETWORK_ERROR: (
        "Failed to connect to the old portfolio. "
        "Please check your internet connection and try again."
    ),
    ErrorCode.PARSE_ERROR: (
        "Failed to parse content from the old portfolio. "
        "The website structure may have changed."
    ),
    ErrorCode.VALIDATION_ERROR: (
        "The extracted data is invalid. Please check the source content."
    ),
    ErrorCode.FILESYSTEM_ERROR: (
        "Failed to save files. Please check file permissions and available disk space."
    ),
    ErrorCode.IMAGE_DOWNLOAD_ERROR: (
        "Failed to download images. Some images may be missing or inaccessible."
    ),
    ErrorCode.UNKNOWN_ERROR: (
        "An unexpected error occurred during migration. Please try again."
    ),
}

RECOVERABLE_CODES = frozenset({ErrorCode.NETWORK_ERROR, ErrorCode.IMAGE_DOWNLOAD_ERROR})

# Keyword groups checked in order against unclassified error messages.
_KEYWORD_CLASSES: tuple[tuple[tuple[str, ...], type[MigrationError]], ...] = (
    (("fetch", "network"), NetworkError),
    (("parse", "JSON"), ParseError),
    (("ENOENT", "file"), FileSystemError),
)


class ErrorHandler:
    """Classify arbitrary exceptions into the migration taxonomy."""

    @staticmethod
    def handle_error(error: BaseException | object, context: str | None = None) -> MigrationError:
        """Return ``error`` as a MigrationError.

        MigrationErrors pass through untouched. Other exceptions are
        classified by keywords in their message; anything unmatched becomes
        ``UNKNOWN_ERROR``.

        Args:
            error: The caught exception (or any raised object)
            context: Short label of the operation that failed

        Returns:
            A MigrationError describing ``error``
        """
        if isinstance(error, MigrationError):
            return error

        if isinstance(error, BaseException):
            message = str(error) or type(error).__name__
            for keywords, error_cls in _KEYWORD_CLASSES:
                if any(keyword in message for keyword in keywords):
                    classified = error_cls(message)
                    classified.__cause__ = error
                    return classified

            classified = MigrationError(
                message,
                ErrorCode.UNKNOWN_ERROR,
                {"original_error": type(error).__name__, "context": context},
            )
            classified.__cause__ = error
            return classified

        return MigrationError(
            f"Unknown error occurred: {error}",
            ErrorCode.UNKNOWN_ERROR,
            {"context": context},
        )

    @staticmethod
    def is_recoverable(error: MigrationError) -> bool:
        """Check whether an error is worth retrying."""
        return error.code in RECOVERABLE_CODES

    @staticmethod
    def get_user_message(error: MigrationError) -> str:
        """Get the friendly sentence for an error's code."""
        return USER_MESSAGES.get(error.code, USER_MESSAGES[ErrorCode.UNKNOWN_ERROR])
