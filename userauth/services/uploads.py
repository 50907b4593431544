"""Storage of uploaded profile images."""

import logging
import re
import shutil
import time
from pathlib import Path
from typing import BinaryIO

from starlette.datastructures import UploadFile

logger = logging.getLogger(__name__)


class MissingUploadError(ValueError):
    """Raised when a handler that needs an uploaded file received none."""


def clean_filename(original: str) -> str:
    """Reduce an uploaded name to a bare filename without whitespace."""
    return re.sub(r"\s+", "", Path(original).name) or "upload"


def open_new_file(directory: Path, name: str) -> tuple[str, BinaryIO]:
    """Create a file that did not exist before and return its name and handle.

    The original name is tried first. When it is taken, a millisecond
    timestamp is prefixed, bumped until an unused name is found. Files are
    created exclusively.
    """
    candidate = name
    stamp = int(time.time() * 1000)
    while True:
        try:
            return candidate, open(directory / candidate, "xb")
        except FileExistsError:
            candidate = f"{stamp}-{name}"
            stamp += 1


def save_upload(upload: UploadFile | None, upload_dir: str) -> str:
    """Write an uploaded file into ``upload_dir`` and return its stored filename."""
    if upload is None or not upload.filename:
        raise MissingUploadError("No file uploaded")

    directory = Path(upload_dir)
    directory.mkdir(parents=True, exist_ok=True)
    filename, out = open_new_file(directory, clean_filename(upload.filename))

    upload.file.seek(0)
    with out:
        shutil.copyfileobj(upload.file, out)

    logger.info(f"Stored upload '{upload.filename}' as {filename}")
    return filename
