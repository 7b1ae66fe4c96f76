"""
Configuration models using Pydantic for validation.

These models ensure type safety and validation for all configuration.
"""

from typing import Literal
from pydantic import BaseModel, Field, field_validator, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from upload_dashboard.domain.exceptions import ConfigurationError


# === PYDANTIC MODELS FOR VALIDATION ===

class UploadLimits(BaseModel):
    """
    Limits applied when files are selected.

    None / empty means "no limit".
    """
    model_config = ConfigDict(frozen=True)

    max_file_size_bytes: int | None = Field(default=None, ge=1, description="Max size of a single file")
    max_files: int | None = Field(default=None, ge=1, description="Max files in the queue")
    allowed_content_types: tuple[str, ...] = Field(
        default=(),
        description="Accepted MIME types; 'image/*' style entries match a prefix"
    )

    @field_validator('allowed_content_types')
    @classmethod
    def validate_content_types(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Normalise and validate MIME type patterns"""
        normalised = tuple(t.strip().lower() for t in v if t.strip())
        for content_type in normalised:
            if "/" not in content_type:
                raise ValueError(f"Invalid content type: {content_type}")
        return normalised

    def allows_content_type(self, content_type: str) -> bool:
        """Check a declared MIME type against the allow-list"""
        if not self.allowed_content_types:
            return True
        content_type = content_type.lower()
        for allowed in self.allowed_content_types:
            if allowed.endswith("/*"):
                if content_type.startswith(allowed[:-1]):
                    return True
            elif content_type == allowed:
                return True
        return False

    def is_unlimited(self) -> bool:
        return (
            self.max_file_size_bytes is None
            and self.max_files is None
            and not self.allowed_content_types
        )


class PreviewConfig(BaseModel):
    """Preview generation configuration"""
    model_config = ConfigDict(frozen=True)

    pdf_icon: str = Field(default="assets/pdf-icon.png", description="Icon shown for PDF files")
    thumbnail_max_px: int = Field(default=256, ge=32, le=2048, description="Longest thumbnail edge")
    max_workers: int = Field(default=2, ge=1, le=16, description="Image decode workers")


class AppConfig(BaseSettings):
    """
    Main application configuration loaded from environment variables.

    Uses Pydantic Settings for automatic env loading, e.g.
    UPLOAD_DASHBOARD_API_BASE_URL or UPLOAD_DASHBOARD_LIMITS__MAX_FILES.
    """
    model_config = SettingsConfigDict(
        env_prefix="UPLOAD_DASHBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore"
    )

    # File service
    api_base_url: str = Field(default="http://localhost:3000", description="File service URL")
    files_endpoint: str = Field(default="/files", description="Listing endpoint")
    upload_endpoint: str = Field(default="/upload", description="Upload endpoint")
    upload_field_name: str = Field(default="files", min_length=1, description="Multipart field name")

    # Timeouts
    request_timeout_seconds: int = Field(default=300, ge=1, le=3600, description="Upload request timeout")
    list_timeout_seconds: int = Field(default=30, ge=1, le=600, description="Listing request timeout")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    # Nested
    limits: UploadLimits = Field(default_factory=UploadLimits)
    preview: PreviewConfig = Field(default_factory=PreviewConfig)

    @field_validator('api_base_url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format"""
        if not v.startswith(('http://', 'https://')):
            raise ValueError(f"Invalid URL format: {v}")
        return v.rstrip('/')

    @field_validator('files_endpoint', 'upload_endpoint')
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Endpoints are absolute paths"""
        if not v.startswith('/'):
            v = '/' + v
        return v

    @field_validator('log_level', mode='before')
    @classmethod
    def normalise_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @classmethod
    def from_env(cls) -> "AppConfig":
        """
        Load configuration from environment variables.

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        try:
            return cls()
        except PydanticValidationError as e:
            error = e.errors()[0]
            key = "__".join(str(part) for part in error["loc"])
            raise ConfigurationError(
                f"Invalid configuration: {error['msg']}",
                config_key=f"UPLOAD_DASHBOARD_{key.upper()}"
            ) from e
