import io
from unittest.mock import patch

from PIL import Image

from docingest.ocr.preprocessor import ImagePreprocessor


def _open(data: bytes) -> Image.Image:
    return Image.open(io.BytesIO(data))


class TestImagePreprocessor:
    def test_output_is_greyscale_png(self, sample_png_bytes: bytes) -> None:
        result = ImagePreprocessor().process(sample_png_bytes)
        image = _open(result)
        assert image.format == "PNG"
        assert image.mode == "L"

    def test_caps_height_and_keeps_aspect_ratio(self, tall_png_bytes: bytes) -> None:
        result = ImagePreprocessor(target_height=2000).process(tall_png_bytes)
        assert _open(result).size == (333, 2000)

    def test_never_upscales(self, sample_png_bytes: bytes) -> None:
        result = ImagePreprocessor(target_height=2000).process(sample_png_bytes)
        assert _open(result).size == (200, 100)

    def test_falls_back_to_original_on_invalid_image(self) -> None:
        data = b"definitely not an image"
        with patch("docingest.ocr.preprocessor.Log") as mock_log:
            result = ImagePreprocessor().process(data)
        assert result == data
        mock_log.warning.assert_called_once()

    def test_falls_back_when_a_step_raises(self, sample_png_bytes: bytes) -> None:
        with patch(
            "docingest.ocr.preprocessor.ImageOps.autocontrast",
            side_effect=OSError("boom"),
        ):
            result = ImagePreprocessor().process(sample_png_bytes)
        assert result == sample_png_bytes
