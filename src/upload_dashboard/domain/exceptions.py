"""
Custom exceptions for domain layer.

All upload dashboard errors inherit from UploadDashboardException.
"""
from typing import Any


class UploadDashboardException(Exception):
    """Base exception for all upload dashboard errors"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(
                f"{k}={v}" for k, v in self.details.items() if v is not None
            )
            if details_str:
                return f"{self.message} ({details_str})"
        return self.message


class ValidationError(UploadDashboardException):
    """Raised when a selected file violates the configured limits"""

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        super().__init__(message, {"field": field, "value": value})
        self.field = field
        self.value = value


class ConfigurationError(UploadDashboardException):
    """Raised when configuration is invalid"""

    def __init__(self, message: str, config_key: str | None = None):
        super().__init__(message, {"config_key": config_key})
        self.config_key = config_key


class ServiceError(UploadDashboardException):
    """Raised when the remote file-storage service fails"""

    def __init__(self, message: str, service_name: str, **kwargs):
        super().__init__(message, {"service_name": service_name, **kwargs})
        self.service_name = service_name


class FetchError(ServiceError):
    """Raised when listing remote files fails"""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, service_name="File service", **kwargs)


class UploadError(ServiceError):
    """Raised when a single file upload fails"""

    def __init__(self, message: str, file_name: str | None = None, **kwargs):
        super().__init__(
            message,
            service_name="File service",
            file_name=file_name,
            **kwargs
        )
        self.file_name = file_name


class PreviewError(UploadDashboardException):
    """Raised when an image preview cannot be decoded"""

    def __init__(self, message: str, file_name: str | None = None):
        super().__init__(message, {"file_name": file_name})
        self.file_name = file_name


class PipelineBusyError(UploadDashboardException):
    """Raised when an upload run is requested while another is in progress"""

    def __init__(self, current_index: int):
        super().__init__(
            "Upload already in progress",
            {"current_index": current_index}
        )
        self.current_index = current_index
