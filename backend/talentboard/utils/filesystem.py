from pathlib import Path
from talentboard.config import settings


def ensure_uploads_dir(uploads_dir: Path | None = None) -> Path:
    path = uploads_dir or settings.uploads_dir
    path.mkdir(parents=True, exist_ok=True)
    return path


def sanitize_filename(name: str) -> str:
    keep = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789._-")
    cleaned = "".join(c if c in keep else "_" for c in Path(name).name)
    return cleaned.lstrip(".") or "upload"


def resolve_upload(filename: str, uploads_dir: Path | None = None) -> Path | None:
    """Path of a stored upload, or None for unknown or unsafe names."""
    if not filename or sanitize_filename(filename) != filename:
        return None
    path = (uploads_dir or settings.uploads_dir) / filename
    return path if path.is_file() else None
