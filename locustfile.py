from locust import HttpUser, task, between
import os
import json
import random
import uuid
from datetime import datetime, timezone


class ImpressionUser(HttpUser):
    """Locust user that records impressions and reads the listing back."""

    wait_time = between(0.5, 2.5)

    def on_start(self):
        self.headers = {"Content-Type": "application/json"}
        self.campaigns = os.getenv("LOCUST_CAMPAIGNS", "camp-1,camp-2,camp-3").split(",")
        self.locations = ["Auckland", "Wellington", "Christchurch", ""]

    @task(10)
    def record_impression(self):
        payload = json.dumps({
            "impression_id": f"locust-{uuid.uuid4()}",
            "campaign_id": random.choice(self.campaigns),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "location": random.choice(self.locations),
        })
        with self.client.post(
            "/api/v1/impressions/",
            data=payload,
            headers=self.headers,
            catch_response=True,
        ) as resp:
            if resp.status_code == 200:
                resp.success()
            else:
                resp.failure(f"Record failed: {resp.status_code} {resp.text[:200]}")

    @task(1)
    def list_impressions(self):
        self.client.get("/api/v1/impressions/", headers=self.headers)


# Useful for headless CSV output: `locust --headless -u 50 -r 5 -t 2m -f locustfile.py --csv out --host http://localhost:8000`
