# apps/impressions/index.py
from typing import Dict, Iterator, List, Mapping, Tuple
from django.conf import settings
from django_redis import get_redis_connection
from redis.exceptions import RedisError
import logging

from .exceptions import MetadataIndexError, ScanError
from .performance import monitor_store_latency

logger = logging.getLogger(__name__)

Record = Tuple[str, Dict[str, str]]


def _text(value):
    return value.decode("utf-8") if isinstance(value, bytes) else value


class ImpressionIndex:
    """
    Metadata index kept as one Redis hash per impression.

    Keys are ``{prefix}{impression_id}``. Listing walks the keyspace with
    ``SCAN`` until the server hands back cursor 0.
    """

    def __init__(self, connection=None, prefix=None, page_size=None):
        if connection is None:
            connection = get_redis_connection(settings.IMPRESSION_INDEX_ALIAS)
        self.connection = connection
        self.prefix = prefix if prefix is not None else settings.IMPRESSION_INDEX_PREFIX
        self.page_size = page_size or settings.IMPRESSION_SCAN_PAGE_SIZE

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    @monitor_store_latency
    def put(self, key: str, fields: Mapping[str, str]) -> None:
        redis_key = self._key(key)

        # Replace, don't merge: a field missing from the new record must not survive
        pipe = self.connection.pipeline(transaction=True)
        pipe.delete(redis_key)
        pipe.hset(redis_key, mapping=dict(fields))
        try:
            pipe.execute()
        except RedisError as e:
            raise MetadataIndexError(f"Failed to write index record {redis_key}: {e}") from e

    def iter_pages(self) -> Iterator[List[Record]]:
        """Yield one list of records per SCAN round trip.

        Keys Redis reports twice during a single walk are only yielded once.
        """
        cursor = 0
        seen = set()
        while True:
            cursor, page = self._fetch_page(cursor, seen)
            yield page
            if cursor == 0:
                break

    def scan_all(self) -> List[Record]:
        return [record for page in self.iter_pages() for record in page]

    @monitor_store_latency
    def _fetch_page(self, cursor, seen) -> Tuple[int, List[Record]]:
        try:
            cursor, keys = self.connection.scan(
                cursor=cursor, match=f"{self.prefix}*", count=self.page_size
            )
            fresh = []
            for raw_key in keys:
                key = _text(raw_key)
                if key not in seen:
                    seen.add(key)
                    fresh.append(key)
            keys = fresh

            if keys:
                pipe = self.connection.pipeline(transaction=False)
                for key in keys:
                    pipe.hgetall(key)
                hashes = pipe.execute()
            else:
                hashes = []
        except RedisError as e:
            raise ScanError(f"Index scan failed at cursor {cursor}: {e}") from e

        page = []
        for key, raw in zip(keys, hashes):
            # Deleted between SCAN and HGETALL
            if not raw:
                continue
            fields = {_text(name): _text(value) for name, value in raw.items()}
            page.append((key[len(self.prefix):], fields))

        return int(cursor), page
