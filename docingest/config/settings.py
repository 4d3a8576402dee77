from pydantic_settings import BaseSettings, SettingsConfigDict

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PDF_MIME_TYPE = "application/pdf"
LEGACY_DOC_MIME_TYPE = "application/msword"


class Settings(BaseSettings):
    """Pipeline configuration loaded once from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    app_env: str = "dev"
    log_level: str = "INFO"

    max_file_size_mb: int = 25
    supported_mime_types: list[str] = [
        PDF_MIME_TYPE,
        DOCX_MIME_TYPE,
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/webp",
    ]
    legacy_mime_types: list[str] = [LEGACY_DOC_MIME_TYPE]

    ocr_language: str = "eng"
    ocr_confidence_threshold: int = 60
    ocr_psm_mode: int = 6
    ocr_target_height: int = 2000

    pdf_engine: str = "pdfplumber"
    pdf_max_pages: int = 20

    thumbnail_width: int = 300
    thumbnail_height: int = 400
    thumbnail_quality: int = 80

    storage_backend: str = "local"
    storage_prefix: str = "cv-documents"
    storage_root: str = "/app/files"
    storage_bucket: str = ""
    storage_region: str = ""
    storage_public_base_url: str = ""

    processing_timeout_seconds: float | None = None
    worker_max_threads: int = 4

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024
