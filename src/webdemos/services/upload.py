"""
Single-file upload demo service.

``POST /upload`` takes one file from a multipart field and stores it under
its original name in the configured save directory. The handler stops at
the first error it reports.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse

from ..config.settings import AppConfig, get_config
from ..errors import MultipartParseError, UploadSaveError
from ..multipart import form_file, parse_multipart, save_uploaded_file, upload_destination, upload_filename
from .base import build_app

logger = logging.getLogger(__name__)

UPLOAD_ERROR_MESSAGE = "上传图片出错"


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Create the single-file upload demo application."""
    config = config or get_config()
    upload_config = config.upload

    app = build_app("Single-file upload demo", "Save one multipart file to disk")

    @app.post("/upload", response_class=PlainTextResponse)
    async def upload_file(request: Request):
        try:
            form = await parse_multipart(request, upload_config.max_multipart_memory)
        except MultipartParseError as e:
            logger.warning(f"Multipart parse failed: {e}")
            return PlainTextResponse(UPLOAD_ERROR_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        try:
            try:
                upload = form_file(form, upload_config.single_field)
            except MultipartParseError as e:
                logger.warning(f"Upload rejected: {e}")
                return PlainTextResponse(UPLOAD_ERROR_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

            filename = upload_filename(upload)
            try:
                await save_uploaded_file(upload, upload_destination(upload, upload_config.save_dir))
            except UploadSaveError as e:
                logger.error(f"Saving {filename!r} failed: {e}")
                return PlainTextResponse(f"save file err: {e}", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        finally:
            await form.close()

        return PlainTextResponse(filename)

    return app
