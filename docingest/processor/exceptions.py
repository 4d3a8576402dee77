class ProcessorError(Exception):
    """Base exception for all pipeline errors."""


class FileProcessingError(ProcessorError):
    """Raised when a file cannot be validated, extracted or converted.

    Carries the offending mime type (when known) so callers can report it.
    """

    def __init__(self, message: str, mime_type: str | None = None) -> None:
        super().__init__(message)
        self.mime_type = mime_type


class ValidationError(FileProcessingError):
    """Raised when an upload fails a precondition check before extraction."""


class LegacyFormatError(FileProcessingError):
    """Raised for the legacy binary word-processing format."""


class UnsupportedConversionError(FileProcessingError):
    """Raised when no converter exists for the requested format pair."""


class ConversionNotAvailableError(FileProcessingError):
    """Raised for a conversion direction that is known but not implemented."""


class ProcessingTimeoutError(FileProcessingError):
    """Raised when a call runs past its deadline."""
