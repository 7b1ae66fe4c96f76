"""
Preview Generator - classify pending files and build their previews.

Strategy by declared MIME type:
- image/*          -> PNG thumbnail as a data: URL (decoded on a worker thread)
- application/pdf  -> fixed icon reference
- anything else    -> no preview
"""

import base64
import io
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

from PIL import Image

from upload_dashboard.domain.exceptions import PreviewError
from upload_dashboard.domain.models.config import PreviewConfig
from upload_dashboard.domain.models.files import FilePreview, PendingFile, PreviewKind

logger = logging.getLogger(__name__)

PreviewCallback = Callable[[FilePreview], None]

# Modes PNG can store without conversion
_PNG_MODES = frozenset(["1", "L", "LA", "P", "RGB", "RGBA", "I"])


class PreviewGenerator:
    """
    Builds previews for pending files.

    Image decoding runs on a thread pool, so image previews may be
    delivered after PDF/other previews selected later.
    """

    def __init__(self, config: PreviewConfig | None = None):
        """
        Initialize preview generator.

        Args:
            config: Preview configuration (icon path, thumbnail size, workers)
        """
        self.config = config or PreviewConfig()
        self._executor = ThreadPoolExecutor(
            max_workers=self.config.max_workers,
            thread_name_prefix="preview"
        )
        logger.info(
            f"PreviewGenerator initialized: "
            f"{self.config.max_workers} workers, {self.config.thumbnail_max_px}px thumbnails"
        )

    def generate(self, file: PendingFile, on_ready: PreviewCallback) -> Future | None:
        """
        Generate a preview and hand it to `on_ready`.

        Args:
            file: File to preview
            on_ready: Receives the preview; called inline for PDF/other
                files, from a worker thread for images

        Returns:
            Future for image decodes, None when the preview was delivered
            synchronously
        """
        if file.is_image():
            return self._executor.submit(self._deliver_image_preview, file, on_ready)

        if file.is_pdf():
            on_ready(FilePreview(file=file, kind=PreviewKind.ICON, payload=self.config.pdf_icon))
        else:
            on_ready(FilePreview.none(file))
        return None

    def build_image_preview(self, file: PendingFile) -> FilePreview:
        """
        Decode an image into an inline thumbnail preview.

        Raises:
            PreviewError: If the bytes cannot be decoded as an image
        """
        return FilePreview(
            file=file,
            kind=PreviewKind.INLINE,
            payload=self._thumbnail_data_url(file)
        )

    def shutdown(self, wait: bool = True) -> None:
        """Stop the decode workers"""
        self._executor.shutdown(wait=wait)

    def _deliver_image_preview(self, file: PendingFile, on_ready: PreviewCallback) -> None:
        try:
            preview = self.build_image_preview(file)
        except PreviewError as e:
            logger.warning(f"Preview unavailable: {e}")
            preview = FilePreview.none(file)

        try:
            on_ready(preview)
        except Exception:
            logger.exception(f"Preview callback failed for {file.name}")

    def _thumbnail_data_url(self, file: PendingFile) -> str:
        """Encode a bounded PNG thumbnail as a data: URL"""
        max_px = self.config.thumbnail_max_px
        try:
            with Image.open(io.BytesIO(file.data)) as img:
                img.thumbnail((max_px, max_px))
                if img.mode not in _PNG_MODES:
                    img = img.convert("RGBA")

                buffer = io.BytesIO()
                img.save(buffer, format="PNG")
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise PreviewError(f"Cannot decode image: {e}", file_name=file.name) from e

        encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
        return f"data:image/png;base64,{encoded}"
