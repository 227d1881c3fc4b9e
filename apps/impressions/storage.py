# apps/impressions/storage.py
from google.api_core.exceptions import GoogleAPIError
from google.cloud import storage
from django.conf import settings
import logging

from .exceptions import ArchiveError
from .performance import monitor_store_latency

logger = logging.getLogger(__name__)


class ImpressionArchive:
    """Write-only client for the impression archive bucket."""

    content_type = "application/json"

    def __init__(self, client=None, bucket_name=None):
        self.client = client or storage.Client(project=settings.GCP_PROJECT_ID)
        self.bucket_name = bucket_name or settings.IMPRESSION_ARCHIVE_BUCKET

    @monitor_store_latency
    def put(self, key: str, payload: bytes) -> None:
        bucket = self.client.bucket(self.bucket_name)
        blob = bucket.blob(key)

        try:
            blob.upload_from_string(payload, content_type=self.content_type)
        except (GoogleAPIError, OSError) as e:
            raise ArchiveError(
                f"Failed to upload gs://{self.bucket_name}/{key}: {e}"
            ) from e

        logger.debug(f"Archived gs://{self.bucket_name}/{key} ({len(payload)} bytes)")
