from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from types import TracebackType

from docingest.logging.logger import Log
from docingest.processor.deadline import Deadline
from docingest.processor.models import FileUpload, ProcessedFile
from docingest.processor.processor import Processor


class ProcessingPool:
    """Runs each processing call on its own worker thread.

    Recognition and parsing block for as long as the engine needs, so calls
    are never executed on the caller's thread.
    """

    def __init__(self, processor: Processor, max_workers: int = 4) -> None:
        self._processor = processor
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="docingest"
        )

    def submit(
        self,
        upload: FileUpload,
        user_id: str,
        deadline: Deadline | None = None,
    ) -> "Future[ProcessedFile]":
        return self._executor.submit(self._processor.process, upload, user_id, deadline)

    def process_many(
        self,
        items: Iterable[tuple[FileUpload, str]],
    ) -> list[ProcessedFile | Exception]:
        """Process uploads concurrently; results keep the input order.

        A failed call yields its exception in place of a result.
        """
        futures = [self.submit(upload, user_id) for upload, user_id in items]
        results: list[ProcessedFile | Exception] = []
        for future in futures:
            exc = future.exception()
            if exc is None:
                results.append(future.result())
            elif isinstance(exc, Exception):
                results.append(exc)
            else:
                raise exc
        Log.info(
            f"Processed batch of {len(results)} files: "
            f"{sum(isinstance(r, Exception) for r in results)} failed"
        )
        return results

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "ProcessingPool":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.shutdown()
