# apps/impressions/services.py
from functools import lru_cache
from typing import Iterator, List
import json
import logging

from .exceptions import ArchiveError, ImpressionValidationError, MetadataIndexError
from .index import ImpressionIndex
from .models import Impression
from .serializers import ImpressionSerializer
from .storage import ImpressionArchive

logger = logging.getLogger(__name__)


class ImpressionService:
    """
    Validates impressions and writes them to the archive, then the index.

    Flow:
    - Validate the event; nothing is written if a field is missing or malformed.
    - Upload the JSON document to the archive as ``{impression_id}.json``.
    - Upsert the index record under ``impression_id``.

    The two writes are not transactional. An index failure after a successful
    upload leaves an archived impression that ``list_all`` does not return;
    there is no rollback or reconciliation.
    """

    def __init__(self, archive, index):
        self.archive = archive
        self.index = index

    def record(self, data) -> Impression:
        serializer = ImpressionSerializer(data=data)
        if not serializer.is_valid():
            logger.info(f"Rejected impression: {dict(serializer.errors)}")
            raise ImpressionValidationError(serializer.errors)

        impression = serializer.save()
        payload = json.dumps(serializer.data).encode("utf-8")

        try:
            self.archive.put(impression.archive_key, payload)
        except ArchiveError as e:
            logger.error(f"Archive write failed for impression {impression.impression_id}: {e}")
            raise

        try:
            self.index.put(impression.impression_id, impression.to_index_fields())
        except MetadataIndexError as e:
            logger.error(
                f"Index write failed for impression {impression.impression_id}; "
                f"archived as {impression.archive_key} but not indexed: {e}"
            )
            raise

        logger.info(f"Recorded impression {impression.impression_id} for campaign {impression.campaign_id}")
        return impression

    def iter_all(self) -> Iterator[Impression]:
        for page in self.index.iter_pages():
            for _key, fields in page:
                yield Impression.from_index_fields(fields)

    def list_all(self) -> List[Impression]:
        impressions = list(self.iter_all())
        logger.debug(f"Listed {len(impressions)} impressions")
        return impressions


@lru_cache(maxsize=None)
def get_impression_service() -> ImpressionService:
    """Process-wide service; store clients are created on first use and reused."""
    return ImpressionService(archive=ImpressionArchive(), index=ImpressionIndex())
