"""Image clean-up ahead of OCR."""

import io

from PIL import Image, ImageFilter, ImageOps

from docingest.logging.logger import Log


class ImagePreprocessor:
    """Prepares raster images for recognition.

    Steps: cap the height at ``target_height`` (never upscaling), convert to
    greyscale, stretch contrast, sharpen, re-encode as PNG. Any failure falls
    back to the original bytes; recognition then runs on the unmodified image.
    """

    def __init__(self, target_height: int = 2000) -> None:
        self._target_height = target_height

    def process(self, data: bytes) -> bytes:
        try:
            return self._optimize(data)
        except Exception as exc:
            Log.warning(f"Image optimization failed, using original: {exc}")
            return data

    def _optimize(self, data: bytes) -> bytes:
        with Image.open(io.BytesIO(data)) as image:
            image = self._limit_height(image)
            image = ImageOps.grayscale(image)
            image = ImageOps.autocontrast(image)
            image = image.filter(ImageFilter.SHARPEN)
            buf = io.BytesIO()
            image.save(buf, format="PNG")
        return buf.getvalue()

    def _limit_height(self, image: Image.Image) -> Image.Image:
        width, height = image.size
        if height <= self._target_height:
            return image
        new_width = max(1, round(width * self._target_height / height))
        return image.resize((new_width, self._target_height), Image.Resampling.LANCZOS)
