from unittest.mock import MagicMock

from django.test import SimpleTestCase
from google.api_core.exceptions import Forbidden, ServiceUnavailable

from apps.impressions.exceptions import ArchiveError
from apps.impressions.storage import ImpressionArchive


class ImpressionArchiveTest(SimpleTestCase):
    def setUp(self):
        self.client = MagicMock()
        self.blob = self.client.bucket.return_value.blob.return_value
        self.archive = ImpressionArchive(client=self.client, bucket_name="test-impressions")

    def test_put_uploads_json_under_key(self):
        self.archive.put("imp-1.json", b'{"impression_id": "imp-1"}')

        self.client.bucket.assert_called_once_with("test-impressions")
        self.client.bucket.return_value.blob.assert_called_once_with("imp-1.json")
        self.blob.upload_from_string.assert_called_once_with(
            b'{"impression_id": "imp-1"}', content_type="application/json"
        )

    def test_api_error_becomes_archive_error(self):
        self.blob.upload_from_string.side_effect = ServiceUnavailable("GCS down")

        with self.assertRaises(ArchiveError) as ctx:
            self.archive.put("imp-1.json", b"{}")

        self.assertIsInstance(ctx.exception.__cause__, ServiceUnavailable)

    def test_permission_error_becomes_archive_error(self):
        self.blob.upload_from_string.side_effect = Forbidden("no write access")

        with self.assertRaises(ArchiveError):
            self.archive.put("imp-1.json", b"{}")

    def test_transport_error_becomes_archive_error(self):
        self.blob.upload_from_string.side_effect = ConnectionResetError("reset by peer")

        with self.assertRaises(ArchiveError):
            self.archive.put("imp-1.json", b"{}")

    def test_default_bucket_comes_from_settings(self):
        with self.settings(IMPRESSION_ARCHIVE_BUCKET="from-settings"):
            archive = ImpressionArchive(client=self.client)
        self.assertEqual(archive.bucket_name, "from-settings")
