import io

import pytesseract
from PIL import Image
from pytesseract import Output

from docingest.extraction.base import BaseExtractor
from docingest.extraction.models import ExtractionMethod, ExtractionResult
from docingest.logging.logger import Log
from docingest.ocr.preprocessor import ImagePreprocessor
from docingest.processor.deadline import Deadline
from docingest.processor.exceptions import FileProcessingError, ProcessingTimeoutError

OCR_MIME_TYPE = "image/*"


class TesseractOcrExtractor(BaseExtractor):
    """Recognizes text in raster images with Tesseract.

    Confidence is the mean word confidence reported by the engine. It is
    logged when it falls below ``confidence_threshold`` but never rejected
    here; gating on it is the caller's decision.
    """

    def __init__(
        self,
        *,
        preprocessor: ImagePreprocessor,
        language: str = "eng",
        psm_mode: int = 6,
        confidence_threshold: int = 60,
    ) -> None:
        self._preprocessor = preprocessor
        self._language = language
        self._psm_mode = psm_mode
        self._confidence_threshold = confidence_threshold

    @property
    def language(self) -> str:
        return self._language

    def can_handle(self, mime_type: str) -> bool:
        return mime_type.startswith("image/")

    def extract(self, data: bytes, deadline: Deadline | None = None) -> ExtractionResult:
        deadline = deadline or Deadline.none()
        processed = self._preprocessor.process(data)
        deadline.check("OCR")

        words = self._recognize(processed, deadline)
        text = self._require_text(
            self._join_words(words), "No text detected in image", OCR_MIME_TYPE
        )
        confidence = self._mean_confidence(words)

        if confidence < self._confidence_threshold:
            Log.warning(
                f"Low OCR confidence: {confidence} "
                f"(threshold {self._confidence_threshold}, {len(text)} chars)"
            )
        return ExtractionResult(text=text, method=ExtractionMethod.OCR, confidence=confidence)

    def _recognize(self, data: bytes, deadline: Deadline) -> list[dict[str, object]]:
        remaining = deadline.remaining()
        try:
            with Image.open(io.BytesIO(data)) as image:
                result = pytesseract.image_to_data(
                    image,
                    lang=self._language,
                    config=f"--psm {self._psm_mode} -c preserve_interword_spaces=1",
                    output_type=Output.DICT,
                    timeout=remaining or 0,
                )
        except RuntimeError as exc:
            if "timeout" in str(exc).lower():
                raise ProcessingTimeoutError(
                    f"OCR exceeded the processing timeout: {exc}", OCR_MIME_TYPE
                ) from exc
            raise FileProcessingError(f"tesseract OCR failed: {exc}", OCR_MIME_TYPE) from exc
        except Exception as exc:
            raise FileProcessingError(f"tesseract OCR failed: {exc}", OCR_MIME_TYPE) from exc
        return self._to_words(result)

    @staticmethod
    def _to_words(result: dict[str, list[object]]) -> list[dict[str, object]]:
        words: list[dict[str, object]] = []
        for index, raw_text in enumerate(result.get("text", [])):
            token = str(raw_text).strip()
            if not token:
                continue
            words.append(
                {
                    "text": token,
                    "conf": float(result["conf"][index]),  # type: ignore[arg-type]
                    "block": result["block_num"][index],
                    "par": result["par_num"][index],
                    "line": result["line_num"][index],
                }
            )
        return words

    @staticmethod
    def _join_words(words: list[dict[str, object]]) -> str:
        """Rebuild text: spaces within a line, newlines between lines, blank lines between paragraphs."""
        parts: list[str] = []
        previous_line: tuple[object, object, object] | None = None
        for word in words:
            line_key = (word["block"], word["par"], word["line"])
            if previous_line is None:
                parts.append(str(word["text"]))
            elif line_key == previous_line:
                parts.append(" " + str(word["text"]))
            elif line_key[:2] == previous_line[:2]:
                parts.append("\n" + str(word["text"]))
            else:
                parts.append("\n\n" + str(word["text"]))
            previous_line = line_key
        return "".join(parts)

    @staticmethod
    def _mean_confidence(words: list[dict[str, object]]) -> float:
        scores = [float(w["conf"]) for w in words if float(w["conf"]) >= 0]  # type: ignore[arg-type]
        if not scores:
            return 0.0
        mean = sum(scores) / len(scores)
        return round(min(100.0, max(0.0, mean)), 2)
