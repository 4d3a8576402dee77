from dataclasses import dataclass


@dataclass(frozen=True)
class ConversionResult:
    """Binary artifact produced by a format conversion."""

    buffer: bytes
    mime_type: str
    download_url: str

    def to_dict(self) -> dict[str, object]:
        return {
            "mimeType": self.mime_type,
            "downloadUrl": self.download_url,
            "size": len(self.buffer),
        }
