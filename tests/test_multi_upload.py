"""
Test suite for the multi-file upload service.
"""

from fastapi.testclient import TestClient

from webdemos.services.multi_upload import create_app


def _files(*names):
    return [("files", (name, f"content of {name}".encode(), "text/plain")) for name in names]


class TestMultiUploadService:
    """Test saving every file of one field."""

    def test_saves_all_files(self, app_config):
        client = TestClient(create_app(app_config))

        response = client.post("/upload", files=_files("a.txt", "b.txt", "c.txt"))

        upload_dir = app_config.upload.upload_dir
        assert response.status_code == 200
        assert response.text == "3 files uploaded"
        for name in ("a.txt", "b.txt", "c.txt"):
            assert (upload_dir / name).read_text() == f"content of {name}"

    def test_stops_at_first_save_failure(self, app_config):
        upload_dir = app_config.upload.upload_dir
        (upload_dir / "b.txt").mkdir(parents=True)
        client = TestClient(create_app(app_config))

        response = client.post("/upload", files=_files("a.txt", "b.txt", "c.txt"))

        assert response.status_code == 400
        assert response.text.startswith("save file err: ")
        # saved before the failure and kept
        assert (upload_dir / "a.txt").exists()
        assert not (upload_dir / "c.txt").exists()

    def test_no_files_in_field(self, app_config):
        client = TestClient(create_app(app_config))

        response = client.post("/upload", files={"other": ("a.txt", b"x", "text/plain")})

        assert response.status_code == 200
        assert response.text == "0 files uploaded"

    def test_non_multipart_body(self, app_config):
        client = TestClient(create_app(app_config))

        response = client.post("/upload", content=b"plain", headers={"content-type": "text/plain"})

        assert response.status_code == 400
        assert response.text == "get form err: request Content-Type isn't multipart/form-data"
        assert not app_config.upload.upload_dir.exists()
