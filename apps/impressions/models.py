# apps/impressions/models.py
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Mapping, Optional

from django.utils.dateparse import parse_datetime

from .exceptions import ScanError

LOCATION_PLACEHOLDER = "N/A"

# Field names of the index record
IMPRESSION_ID = "ImpressionId"
CAMPAIGN_ID = "CampaignId"
TIMESTAMP = "Timestamp"
LOCATION = "Location"


@dataclass(frozen=True)
class Impression:
    """One ad display event.

    Impressions are not Django models: the archive bucket and the Redis
    index are the only places they live.
    """

    impression_id: str
    campaign_id: str
    timestamp: datetime
    location: Optional[str] = None

    @property
    def archive_key(self) -> str:
        return f"{self.impression_id}.json"

    def to_index_fields(self) -> Dict[str, str]:
        fields = {
            IMPRESSION_ID: self.impression_id,
            CAMPAIGN_ID: self.campaign_id,
            TIMESTAMP: self.timestamp.isoformat(),
        }
        # Absent locations stay absent, the placeholder is applied on read
        if self.location:
            fields[LOCATION] = self.location
        return fields

    @classmethod
    def from_index_fields(cls, fields: Mapping[str, str]) -> "Impression":
        try:
            impression_id = fields[IMPRESSION_ID]
            campaign_id = fields[CAMPAIGN_ID]
            raw_timestamp = fields[TIMESTAMP]
        except KeyError as e:
            raise ScanError(f"Index record is missing field {e.args[0]}") from e

        try:
            timestamp = parse_datetime(raw_timestamp)
        except ValueError:
            timestamp = None
        if timestamp is None:
            raise ScanError(
                f"Index record {impression_id} has an unreadable timestamp: {raw_timestamp!r}"
            )

        return cls(
            impression_id=impression_id,
            campaign_id=campaign_id,
            timestamp=timestamp,
            location=fields.get(LOCATION) or LOCATION_PLACEHOLDER,
        )
