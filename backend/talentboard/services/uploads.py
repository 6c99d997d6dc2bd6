"""Resume upload handling.

A resume is validated in memory first, then written under the uploads
directory, and only kept if the record that references it is committed:

    resume = await read_resume(upload)
    with resume_on_disk(resume) as stored:
        ...  # build and commit the record; any exception removes the file
"""
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from fastapi import UploadFile

from talentboard.config import settings
from talentboard.errors import BadRequestError, StorageError
from talentboard.utils.filesystem import ensure_uploads_dir, sanitize_filename

logger = logging.getLogger("talentboard.uploads")

CHUNK_SIZE = 1024 * 1024
INVALID_TYPE_MESSAGE = "Invalid file type! Only PDF and DOC files are allowed."


@dataclass(frozen=True)
class ResumeUpload:
    original_name: str
    content_type: str
    content: bytes


@dataclass(frozen=True)
class StoredResume:
    filename: str
    path: Path
    mimetype: str


async def read_resume(upload: UploadFile | None) -> ResumeUpload | None:
    """Validate type and size of an optional upload without touching disk."""
    if upload is None or not upload.filename:
        return None
    if upload.content_type not in settings.allowed_resume_types:
        raise BadRequestError(INVALID_TYPE_MESSAGE)

    max_bytes = settings.max_resume_bytes
    size = 0
    chunks: list[bytes] = []
    while True:
        chunk = await upload.read(CHUNK_SIZE)
        if not chunk:
            break
        size += len(chunk)
        if size > max_bytes:
            raise BadRequestError(f"File too large (max {max_bytes} bytes)")
        chunks.append(chunk)

    content = b"".join(chunks)
    if not content:
        raise BadRequestError("Empty file")
    return ResumeUpload(upload.filename, upload.content_type, content)


def store_resume(resume: ResumeUpload, uploads_dir: Path | None = None) -> StoredResume:
    """Write under ``<time_ns>-<name>``; never overwrites an existing file."""
    try:
        directory = ensure_uploads_dir(uploads_dir)
    except OSError as exc:
        raise StorageError("Error saving resume file", detail=str(exc)) from exc

    safe_name = sanitize_filename(resume.original_name)
    stamp = time.time_ns()
    while True:
        path = directory / f"{stamp}-{safe_name}"
        try:
            handle = path.open("xb")
        except FileExistsError:
            stamp += 1
            continue
        except OSError as exc:
            raise StorageError("Error saving resume file", detail=str(exc)) from exc
        break

    try:
        with handle:
            handle.write(resume.content)
    except OSError as exc:
        discard_file(path)
        raise StorageError("Error saving resume file", detail=str(exc)) from exc

    logger.info("Stored resume %s (%d bytes)", path.name, len(resume.content))
    return StoredResume(path.name, path, resume.content_type)


def discard_file(path: Path) -> bool:
    """Remove a stored file. Failures are logged, never raised."""
    try:
        path.unlink()
    except FileNotFoundError:
        logger.warning("File %s was already gone", path)
        return False
    except OSError as exc:
        logger.error("Error deleting file %s: %s", path, exc)
        return False
    return True


@contextmanager
def resume_on_disk(
    resume: ResumeUpload | None, uploads_dir: Path | None = None
) -> Iterator[StoredResume | None]:
    if resume is None:
        yield None
        return

    stored = store_resume(resume, uploads_dir)
    committed = False
    try:
        yield stored
        committed = True
    finally:
        if not committed:
            logger.info("Removing %s after failed save", stored.filename)
            discard_file(stored.path)
