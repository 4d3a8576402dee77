from docingest.config.settings import Settings
from docingest.processor.exceptions import ValidationError
from docingest.processor.models import FileUpload


def validate(upload: FileUpload, settings: Settings) -> None:
    """Check upload preconditions before any extraction work.

    Legacy mime types pass here on purpose: they are rejected at dispatch
    time with a dedicated message.

    Raises:
        ValidationError: if the upload is empty, too large or of an unsupported type.
    """
    if not upload.buffer or upload.size <= 0:
        raise ValidationError("File is empty", upload.mime_type)

    if upload.size > settings.max_file_size_bytes:
        limit_mb = settings.max_file_size_bytes / 1024 / 1024
        raise ValidationError(
            f"File size exceeds maximum allowed size of {limit_mb:g}MB",
            upload.mime_type,
        )

    accepted = (*settings.supported_mime_types, *settings.legacy_mime_types)
    if upload.mime_type not in accepted:
        raise ValidationError(
            "Unsupported file type. Supported types: "
            f"{', '.join(settings.supported_mime_types)}",
            upload.mime_type,
        )
