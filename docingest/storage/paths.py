import re

from docingest.storage.exceptions import StorageError

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")
_UNDERSCORE_RUNS = re.compile(r"_+")


def sanitize_file_name(file_name: str) -> str:
    """Replace anything outside [a-zA-Z0-9.-] with '_', collapse runs, lowercase."""
    return _UNDERSCORE_RUNS.sub("_", _UNSAFE_CHARS.sub("_", file_name)).lower()


def check_user_id(user_id: str) -> str:
    """Ensure ``user_id`` is a single key segment so it cannot reach another user's area.

    Raises:
        StorageError: if the id is empty, contains a path separator or '..'.
    """
    if not user_id.strip() or "/" in user_id or "\\" in user_id or ".." in user_id:
        raise StorageError(f"Invalid user id for storage path: {user_id!r}")
    return user_id


def document_path(prefix: str, user_id: str, file_id: str, original_name: str) -> str:
    """Build key for an uploaded original: {prefix}/{user_id}/{file_id}_{name}"""
    return f"{prefix}/{check_user_id(user_id)}/{file_id}_{sanitize_file_name(original_name)}"


def thumbnail_path(prefix: str, user_id: str, file_id: str) -> str:
    """Build key for a derived thumbnail: {prefix}/{user_id}/thumbnails/{file_id}_thumb.jpg"""
    return f"{prefix}/{check_user_id(user_id)}/thumbnails/{file_id}_thumb.jpg"


def converted_path(prefix: str, user_id: str, file_id: str, extension: str = "docx") -> str:
    """Build key for a converted output: {prefix}/{user_id}/converted/{file_id}_converted.{ext}"""
    return f"{prefix}/{check_user_id(user_id)}/converted/{file_id}_converted.{extension}"
