import time
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from docingest.extraction.models import ExtractionResult
from docingest.processor.deadline import Deadline
from docingest.processor.models import FileUpload, ProcessedFile


class ProcessingStage(str, Enum):
    VALIDATING = "validating"
    EXTRACTING = "extracting"
    UPLOADING = "uploading"
    THUMBNAIL_GENERATING = "thumbnail_generating"
    METADATA_COMPUTING = "metadata_computing"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class PipelineContext:
    upload: FileUpload
    user_id: str
    file_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    deadline: Deadline = field(default_factory=Deadline.none)
    started_at: float = field(default_factory=time.monotonic)
    stage: ProcessingStage = ProcessingStage.VALIDATING
    extraction: ExtractionResult | None = None
    storage_path: str = ""
    download_url: str = ""
    thumbnail_url: str = ""
    result: ProcessedFile | None = None
    error_message: str = ""

    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self.started_at) * 1000)


class PipelineStep(ABC):
    stage: ProcessingStage
    interruptible: bool = True

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
