"""
Factory functions for easy initialization of infrastructure components.
"""

import logging
from datetime import datetime
from typing import Callable

from upload_dashboard.domain.models.config import AppConfig
from upload_dashboard.application.preview_generator import PreviewGenerator
from upload_dashboard.application.upload_pipeline import UploadPipeline

from .http.file_service_client import FileServiceClient

logger = logging.getLogger(__name__)


def create_file_service_client(config: AppConfig) -> FileServiceClient:
    """
    Create file service client.

    Args:
        config: Application configuration

    Returns:
        Configured client
    """
    return FileServiceClient(
        base_url=config.api_base_url,
        files_endpoint=config.files_endpoint,
        upload_endpoint=config.upload_endpoint,
        field_name=config.upload_field_name,
        timeout=config.request_timeout_seconds,
        list_timeout=config.list_timeout_seconds
    )


def create_preview_generator(config: AppConfig) -> PreviewGenerator:
    return PreviewGenerator(config.preview)


def create_pipeline(
    config: AppConfig,
    clock: Callable[[], datetime] = datetime.now
) -> UploadPipeline:
    """
    Create fully configured upload pipeline.

    Args:
        config: Application configuration
        clock: Source of "now" for the today filter

    Returns:
        Ready-to-use upload pipeline

    Example:
        >>> pipeline = create_pipeline(AppConfig.from_env())
        >>> pipeline.select_files([PendingFile("a.txt", b"hi", "text/plain")])
        >>> pipeline.upload_files()
    """
    pipeline = UploadPipeline(
        file_service=create_file_service_client(config),
        preview_generator=create_preview_generator(config),
        limits=config.limits,
        clock=clock
    )

    logger.info(f"✓ Upload pipeline ready ({config.api_base_url})")
    return pipeline
