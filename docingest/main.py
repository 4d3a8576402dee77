import argparse
import json
import mimetypes
import sys
from pathlib import Path

from docingest.config.settings import Settings
from docingest.logging.logger import Log
from docingest.processor.models import FileUpload
from docingest.processor.processor import build_processor
from docingest.worker.pool import ProcessingPool


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="docingest",
        description="Extract text from documents and store the originals.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="Files to process")
    parser.add_argument("--user-id", required=True, help="Owner used to namespace storage paths")
    parser.add_argument(
        "--mime-type",
        default=None,
        help="Override the mime type guessed from each file's extension",
    )
    return parser.parse_args(argv)


def load_upload(path: Path, mime_type: str | None = None) -> FileUpload:
    """Read a file from disk into a FileUpload."""
    data = path.read_bytes()
    guessed = mime_type or mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return FileUpload(buffer=data, original_name=path.name, mime_type=guessed, size=len(data))


def main(argv: list[str] | None = None) -> int:
    """Entry point: configure logging -> build processor -> process files concurrently."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    processor = build_processor(settings)
    uploads = [(load_upload(path, args.mime_type), args.user_id) for path in args.files]

    with ProcessingPool(processor, max_workers=settings.worker_max_threads) as pool:
        results = pool.process_many(uploads)

    failures = 0
    for path, result in zip(args.files, results):
        if isinstance(result, Exception):
            failures += 1
            print(json.dumps({"file": str(path), "error": str(result)}))
        else:
            print(json.dumps(result.to_dict()))
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
