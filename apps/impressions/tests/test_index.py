from unittest.mock import MagicMock

from django.test import SimpleTestCase
from redis.exceptions import ConnectionError as RedisConnectionError

from apps.impressions.exceptions import MetadataIndexError, ScanError
from apps.impressions.index import ImpressionIndex
from .fakes import FakeRedis


def _record(impression_id):
    return {
        b"ImpressionId": impression_id.encode(),
        b"CampaignId": b"camp-9",
        b"Timestamp": b"2024-01-01T00:00:00+00:00",
    }


class ImpressionIndexTest(SimpleTestCase):
    def setUp(self):
        self.redis = FakeRedis()
        self.index = ImpressionIndex(connection=self.redis, prefix="imp:", page_size=2)

    def test_put_stores_hash_under_prefixed_key(self):
        self.index.put("imp-1", {"ImpressionId": "imp-1", "CampaignId": "camp-9"})
        self.assertEqual(self.redis.hgetall("imp:imp-1"), {
            b"ImpressionId": b"imp-1",
            b"CampaignId": b"camp-9",
        })

    def test_put_replaces_previous_record(self):
        self.index.put("imp-1", {"ImpressionId": "imp-1", "Location": "Auckland"})
        self.index.put("imp-1", {"ImpressionId": "imp-1"})
        self.assertNotIn(b"Location", self.redis.hgetall("imp:imp-1"))

    def test_scan_all_walks_every_page(self):
        for n in range(5):
            self.index.put(f"imp-{n}", {"ImpressionId": f"imp-{n}"})

        records = self.index.scan_all()

        self.assertEqual([key for key, _ in records], [f"imp-{n}" for n in range(5)])
        self.assertEqual(records[0][1], {"ImpressionId": "imp-0"})
        self.assertEqual(self.redis.scan_calls, 3)

    def test_scan_all_count_is_stable(self):
        for n in range(4):
            self.index.put(f"imp-{n}", {"ImpressionId": f"imp-{n}"})
        self.assertEqual(len(self.index.scan_all()), len(self.index.scan_all()))

    def test_scan_ignores_keys_outside_prefix(self):
        self.redis.hset("other:1", mapping={"x": "y"})
        self.index.put("imp-1", {"ImpressionId": "imp-1"})
        self.assertEqual([key for key, _ in self.index.scan_all()], ["imp-1"])

    def test_scan_all_on_empty_index(self):
        self.assertEqual(self.index.scan_all(), [])

    def test_put_failure_raises_index_error(self):
        connection = MagicMock()
        connection.pipeline.return_value.execute.side_effect = RedisConnectionError("down")
        index = ImpressionIndex(connection=connection, prefix="imp:", page_size=2)

        with self.assertRaises(MetadataIndexError):
            index.put("imp-1", {"ImpressionId": "imp-1"})


class ImpressionIndexPaginationTest(SimpleTestCase):
    def setUp(self):
        self.connection = MagicMock()
        self.pipe = self.connection.pipeline.return_value
        self.index = ImpressionIndex(connection=self.connection, prefix="imp:", page_size=2)

    def test_three_pages_are_concatenated_in_order(self):
        self.connection.scan.side_effect = [
            (7, [b"imp:a", b"imp:b"]),
            (3, [b"imp:c"]),
            (0, [b"imp:d", b"imp:e"]),
        ]
        self.pipe.execute.side_effect = [
            [_record("a"), _record("b")],
            [_record("c")],
            [_record("d"), _record("e")],
        ]

        pages = list(self.index.iter_pages())

        self.assertEqual([[key for key, _ in page] for page in pages], [["a", "b"], ["c"], ["d", "e"]])
        self.assertEqual(
            [call.kwargs["cursor"] for call in self.connection.scan.call_args_list],
            [0, 7, 3],
        )

    def test_empty_page_with_open_cursor_keeps_scanning(self):
        self.connection.scan.side_effect = [
            (9, []),
            (0, [b"imp:a"]),
        ]
        self.pipe.execute.side_effect = [[_record("a")]]

        records = self.index.scan_all()

        self.assertEqual([key for key, _ in records], ["a"])
        self.assertEqual(self.connection.scan.call_count, 2)

    def test_duplicate_keys_are_reported_once(self):
        self.connection.scan.side_effect = [
            (5, [b"imp:a", b"imp:b"]),
            (0, [b"imp:b", b"imp:c"]),
        ]
        self.pipe.execute.side_effect = [
            [_record("a"), _record("b")],
            [_record("c")],
        ]

        records = self.index.scan_all()

        self.assertEqual([key for key, _ in records], ["a", "b", "c"])

    def test_key_deleted_mid_scan_is_skipped(self):
        self.connection.scan.side_effect = [(0, [b"imp:a", b"imp:gone"])]
        self.pipe.execute.side_effect = [[_record("a"), {}]]

        self.assertEqual([key for key, _ in self.index.scan_all()], ["a"])

    def test_failure_mid_scan_fails_whole_scan(self):
        self.connection.scan.side_effect = [
            (5, [b"imp:a"]),
            RedisConnectionError("connection reset"),
        ]
        self.pipe.execute.side_effect = [[_record("a")]]

        with self.assertRaises(ScanError):
            self.index.scan_all()
