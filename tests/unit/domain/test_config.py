"""
Unit tests for configuration models.
"""

import os

import pytest
from pydantic import ValidationError

from upload_dashboard.domain.exceptions import ConfigurationError
from upload_dashboard.domain.models.config import (
    AppConfig,
    PreviewConfig,
    UploadLimits,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate from the developer's environment and .env file"""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.upper().startswith("UPLOAD_DASHBOARD_"):
            monkeypatch.delenv(key)


class TestUploadLimits:
    """Test selection limits"""

    def test_default_unlimited(self):
        limits = UploadLimits()
        assert limits.is_unlimited()
        assert limits.allows_content_type("anything/at-all")

    def test_prefix_pattern(self):
        limits = UploadLimits(allowed_content_types=("image/*",))
        assert limits.allows_content_type("image/png")
        assert limits.allows_content_type("IMAGE/JPEG")
        assert not limits.allows_content_type("application/pdf")

    def test_types_normalised(self):
        limits = UploadLimits(allowed_content_types=(" Application/PDF ", ""))
        assert limits.allowed_content_types == ("application/pdf",)

    def test_invalid_type(self):
        with pytest.raises(ValidationError):
            UploadLimits(allowed_content_types=("image",))

    def test_positive_limits(self):
        with pytest.raises(ValidationError):
            UploadLimits(max_files=0)

        with pytest.raises(ValidationError):
            UploadLimits(max_file_size_bytes=0)

    def test_immutable(self):
        limits = UploadLimits()
        with pytest.raises(Exception):  # Pydantic frozen
            limits.max_files = 3


class TestPreviewConfig:
    """Test preview configuration"""

    def test_default_config(self):
        config = PreviewConfig()
        assert config.pdf_icon == "assets/pdf-icon.png"
        assert config.thumbnail_max_px == 256

    def test_thumbnail_range(self):
        with pytest.raises(ValidationError):
            PreviewConfig(thumbnail_max_px=8)

        with pytest.raises(ValidationError):
            PreviewConfig(thumbnail_max_px=5000)


class TestAppConfig:
    """Test main application configuration"""

    def test_default_config(self):
        config = AppConfig()
        assert config.api_base_url == "http://localhost:3000"
        assert config.files_endpoint == "/files"
        assert config.upload_endpoint == "/upload"
        assert config.upload_field_name == "files"
        assert config.limits.is_unlimited()

    def test_url_validation(self):
        """URLs must start with http:// or https://"""
        with pytest.raises(ValidationError):
            AppConfig(api_base_url="localhost:3000")

    def test_url_trailing_slash_removed(self):
        config = AppConfig(api_base_url="https://files.example.com/")
        assert config.api_base_url == "https://files.example.com"

    def test_endpoint_gets_leading_slash(self):
        config = AppConfig(upload_endpoint="api/upload")
        assert config.upload_endpoint == "/api/upload"

    def test_log_level_case_insensitive(self):
        assert AppConfig(log_level="debug").log_level == "DEBUG"

    def test_timeout_validation(self):
        with pytest.raises(ValidationError):
            AppConfig(request_timeout_seconds=0)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("UPLOAD_DASHBOARD_API_BASE_URL", "http://files:8080")
        monkeypatch.setenv("UPLOAD_DASHBOARD_LIMITS__MAX_FILES", "5")

        config = AppConfig.from_env()

        assert config.api_base_url == "http://files:8080"
        assert config.limits.max_files == 5

    def test_from_env_invalid_value(self, monkeypatch):
        monkeypatch.setenv("UPLOAD_DASHBOARD_LIMITS__MAX_FILES", "0")

        with pytest.raises(ConfigurationError) as exc_info:
            AppConfig.from_env()

        assert exc_info.value.config_key == "UPLOAD_DASHBOARD_LIMITS__MAX_FILES"
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_from_env_invalid_url(self, monkeypatch):
        monkeypatch.setenv("UPLOAD_DASHBOARD_API_BASE_URL", "files:8080")

        with pytest.raises(ConfigurationError, match="Invalid URL format"):
            AppConfig.from_env()
