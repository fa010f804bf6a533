"""
Multipart form parsing and uploaded file persistence.

Each uploaded file is spooled in memory up to a configurable threshold and
spills to a temporary file beyond it. Saving copies the spooled stream to
its destination on a worker thread so the event loop stays free.
"""

import logging
import shutil
from pathlib import Path
from typing import BinaryIO, List, Union

from fastapi import Request
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import FormData, UploadFile
from starlette.formparsers import MultiPartException, MultiPartParser

from .errors import MultipartParseError, UploadSaveError

logger = logging.getLogger(__name__)

MULTIPART_MEDIA_TYPE = "multipart/form-data"


async def parse_multipart(request: Request, memory_limit: int) -> FormData:
    """
    Parse a multipart/form-data request body.

    Args:
        request: Incoming request
        memory_limit: Bytes of each file kept in memory before spooling to disk

    Returns:
        The parsed form; callers own it and must close it

    Raises:
        MultipartParseError: When the body is not a well-formed multipart form
    """
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type != MULTIPART_MEDIA_TYPE:
        raise MultipartParseError("request Content-Type isn't multipart/form-data")

    parser = MultiPartParser(request.headers, request.stream())
    parser.spool_max_size = memory_limit
    try:
        form = await parser.parse()
    except MultiPartException as e:
        raise MultipartParseError(e.message) from e

    logger.debug(f"Parsed multipart form with fields {list(form.keys())}")
    return form


def form_files(form: FormData, field: str) -> List[UploadFile]:
    """Return the files posted under field, in request order."""
    return [item for item in form.getlist(field) if isinstance(item, UploadFile)]


def form_file(form: FormData, field: str) -> UploadFile:
    """
    Return the first file posted under field.

    Raises:
        MultipartParseError: When the field holds no file
    """
    files = form_files(form, field)
    if not files:
        raise MultipartParseError(f"no such file in field '{field}'")
    return files[0]


def upload_filename(upload: UploadFile) -> str:
    """Base name of the client supplied filename."""
    return Path(upload.filename or "").name


def upload_destination(upload: UploadFile, directory: Union[str, Path]) -> Path:
    """
    Path under directory where an upload is stored, named after its client filename.

    Raises:
        UploadSaveError: When the filename has no usable base name
    """
    filename = upload_filename(upload)
    if filename in ("", ".", ".."):
        raise UploadSaveError(f"invalid filename {upload.filename!r}")
    return Path(directory) / filename


def _copy_to(source: BinaryIO, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    source.seek(0)
    with open(destination, "wb") as out:
        shutil.copyfileobj(source, out)


async def save_uploaded_file(upload: UploadFile, destination: Union[str, Path]) -> Path:
    """
    Write an uploaded file to destination, creating missing parent directories.

    Raises:
        UploadSaveError: When the destination cannot be written
    """
    destination = Path(destination)
    try:
        await run_in_threadpool(_copy_to, upload.file, destination)
    except OSError as e:
        raise UploadSaveError(f"open {destination}: {e.strerror or e}") from e

    logger.info(f"Saved upload {upload.filename!r} to {destination}")
    return destination
