"""Product image storage (Supabase Storage bucket)."""
import time

from supabase._async.client import AsyncClient

from menstyle.db import STORAGE_BUCKET
from menstyle.errors import ERROR_UPLOAD_FAILED, ExternalApiError
from menstyle.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def storage_name_for(filename: str, timestamp_ms: int) -> str:
    """``<epoch millis>.<original extension>``; the original name is not kept."""
    extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
    return f"{timestamp_ms}.{extension}"


class ImageStorage:
    """Uploads product photos and resolves their public URLs."""

    def __init__(self, client: AsyncClient, bucket: str = STORAGE_BUCKET):
        self.client = client
        self.bucket = bucket

    async def upload(self, filename: str, content: bytes, content_type: str | None = None) -> str:
        """
        Store ``content`` and return the public URL to save on the product.

        Raises:
            ExternalApiError: upload or URL lookup failed
        """
        name = storage_name_for(filename, _timestamp_ms())
        bucket = self.client.storage.from_(self.bucket)
        file_options = {"content-type": content_type} if content_type else None

        try:
            await bucket.upload(name, content, file_options)
            url = await bucket.get_public_url(name)
        except Exception as e:
            logger.error(
                f"Image upload failed for {sanitize_string_for_logging(filename)}: {e}",
                exc_info=True,
            )
            raise ExternalApiError(ERROR_UPLOAD_FAILED) from e

        logger.info(f"Uploaded product image {name}")
        return url
