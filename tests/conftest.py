"""
pytest configuration and fixtures.
"""

import pytest

from webdemos.config.settings import AppConfig, UploadConfig


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    """Configuration whose upload directories live under tmp_path."""
    return AppConfig(
        upload=UploadConfig(
            save_dir=tmp_path / "saved",
            upload_dir=tmp_path / "uploads",
        )
    )
