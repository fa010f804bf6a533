"""
Test suite for the single-file upload service and multipart helpers.
"""

import io

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from starlette.datastructures import UploadFile

from webdemos.config.settings import AppConfig, UploadConfig
from webdemos.errors import UploadSaveError
from webdemos.multipart import form_file, parse_multipart, upload_destination
from webdemos.services.upload import create_app


class TestSingleUploadService:
    """Test saving one uploaded file."""

    def setup_method(self):
        self.files = {"file": ("a.txt", b"hello", "text/plain")}

    def test_saves_file_and_echoes_name(self, app_config):
        client = TestClient(create_app(app_config))

        response = client.post("/upload", files=self.files)

        assert response.status_code == 200
        assert response.text == "a.txt"
        assert (app_config.upload.save_dir / "a.txt").read_bytes() == b"hello"

    def test_uses_base_name_of_client_filename(self, app_config):
        client = TestClient(create_app(app_config))

        response = client.post("/upload", files={"file": ("../../etc/b.txt", b"x", "text/plain")})

        assert response.status_code == 200
        assert response.text == "b.txt"
        assert (app_config.upload.save_dir / "b.txt").exists()

    def test_non_multipart_body(self, app_config):
        client = TestClient(create_app(app_config))

        response = client.post("/upload", json={"file": "a.txt"})

        assert response.status_code == 500
        assert response.text == "上传图片出错"
        assert not app_config.upload.save_dir.exists()

    def test_missing_file_field(self, app_config):
        client = TestClient(create_app(app_config))

        response = client.post("/upload", files={"other": ("a.txt", b"hello", "text/plain")})

        assert response.status_code == 500
        assert response.text == "上传图片出错"
        assert not app_config.upload.save_dir.exists()

    def test_malformed_multipart_body(self, app_config):
        client = TestClient(create_app(app_config))

        response = client.post(
            "/upload",
            content=b"not a multipart payload",
            headers={"content-type": "multipart/form-data; boundary=xyz"},
        )

        assert response.status_code == 500
        assert response.text == "上传图片出错"
        assert not app_config.upload.save_dir.exists()

    def test_default_save_dir_is_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        client = TestClient(create_app(AppConfig(upload=UploadConfig())))

        response = client.post("/upload", files=self.files)

        assert response.status_code == 200
        assert response.text == "a.txt"
        assert (tmp_path / "a.txt").read_bytes() == b"hello"

    def test_save_failure(self, app_config):
        (app_config.upload.save_dir / "a.txt").mkdir(parents=True)
        client = TestClient(create_app(app_config))

        response = client.post("/upload", files=self.files)

        assert response.status_code == 500
        assert response.text.startswith("save file err: ")


class TestParseMultipart:
    """Test the in-memory spooling threshold."""

    def _client(self, memory_limit: int) -> TestClient:
        app = FastAPI()

        @app.post("/spool")
        async def spool(request: Request):
            form = await parse_multipart(request, memory_limit)
            try:
                upload = form_file(form, "file")
                return {"rolled": upload.file._rolled, "content": (await upload.read()).decode()}
            finally:
                await form.close()

        return TestClient(app)

    def test_small_file_stays_in_memory(self):
        response = self._client(8 << 20).post("/spool", files={"file": ("a.txt", b"hello world", "text/plain")})

        assert response.json() == {"rolled": False, "content": "hello world"}

    def test_large_file_spills_to_disk(self):
        response = self._client(4).post("/spool", files={"file": ("a.txt", b"hello world", "text/plain")})

        assert response.json() == {"rolled": True, "content": "hello world"}


class TestUploadDestination:
    """Test destination naming for uploaded files."""

    def _upload(self, filename):
        return UploadFile(file=io.BytesIO(b"x"), filename=filename)

    def test_base_name_under_directory(self, tmp_path):
        assert upload_destination(self._upload("dir/a.txt"), tmp_path) == tmp_path / "a.txt"

    @pytest.mark.parametrize("filename", ["", ".", "..", None])
    def test_unusable_names(self, tmp_path, filename):
        with pytest.raises(UploadSaveError):
            upload_destination(self._upload(filename), tmp_path)
