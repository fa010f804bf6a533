"""
Multi-file upload demo service.

``POST /upload`` takes every file posted under one multipart field and
stores them, in order, under the upload directory. The first file that
cannot be saved ends the request with a 400; files saved before it are
kept and the remaining ones are never attempted.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse

from ..config.settings import AppConfig, get_config
from ..errors import MultipartParseError, UploadSaveError
from ..multipart import form_files, parse_multipart, save_uploaded_file, upload_destination
from .base import build_app

logger = logging.getLogger(__name__)


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Create the multi-file upload demo application."""
    config = config or get_config()
    upload_config = config.upload

    app = build_app("Multi-file upload demo", "Save every multipart file of one field to disk")

    @app.post("/upload", response_class=PlainTextResponse)
    async def upload_files(request: Request):
        try:
            form = await parse_multipart(request, upload_config.max_multipart_memory)
        except MultipartParseError as e:
            logger.warning(f"Multipart parse failed: {e}")
            return PlainTextResponse(f"get form err: {e}", status_code=status.HTTP_400_BAD_REQUEST)

        try:
            files = form_files(form, upload_config.multi_field)
            for upload in files:
                try:
                    await save_uploaded_file(upload, upload_destination(upload, upload_config.upload_dir))
                except UploadSaveError as e:
                    logger.error(f"Upload aborted at {upload.filename!r}: {e}")
                    return PlainTextResponse(f"save file err: {e}", status_code=status.HTTP_400_BAD_REQUEST)
        finally:
            await form.close()

        logger.info(f"{len(files)} files saved to {upload_config.upload_dir}")
        return PlainTextResponse(f"{len(files)} files uploaded")

    return app
