"""
API tests for the alerts/localities routers (upstream alert service stubbed).
"""
import unittest

import httpx
from fastapi.testclient import TestClient

from cctv_locator.main import app
from cctv_locator.schemas.alerts import Alert
from cctv_locator.schemas.common import Coordinate, Locality
from cctv_locator.services.alerts_api import get_alerts_client
from cctv_locator.services.catalog import default_catalog

CATALOG = (
    Locality(name="A", coordinate=Coordinate(lat=12.0, lng=77.0)),
    Locality(name="B", coordinate=Coordinate(lat=12.1, lng=77.1)),
    Locality(name="C", coordinate=Coordinate(lat=40.0, lng=-70.0)),
)

ALERTS = [
    {
        "_id": "a1",
        "anomalyTime": "2026-10-01 21:14:03",
        "coordinates": "12.05,77.05",
        "location": "Koramangala",
        "firebaseUrl": "https://firebasestorage.example/v/a1.mp4",
        "pinataUrl": "https://gateway.pinata.cloud/ipfs/QmOld",
        "footageUrl": "QmOld",
    },
    {
        "_id": "a2",
        "coordinates": {"lat": "oops", "lng": 77.0},
        "footageUrl": "QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG",
    },
    {"_id": "a3"},
]


class FakeAlertsClient:
    def __init__(self, alerts=None, error=None, delete_ok=True):
        self.alerts = alerts or []
        self.error = error
        self.delete_ok = delete_ok
        self.deleted = []

    async def fetch_alerts(self):
        if self.error:
            raise self.error
        return [Alert.model_validate(a) for a in self.alerts]

    async def delete_alert(self, alert_id):
        if self.error:
            raise self.error
        self.deleted.append(alert_id)
        return self.delete_ok


class RouteTestCase(unittest.TestCase):

    def setUp(self):
        self.fake = FakeAlertsClient(ALERTS)
        app.dependency_overrides[get_alerts_client] = lambda: self.fake
        app.dependency_overrides[default_catalog] = lambda: CATALOG
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()


class TestRoot(RouteTestCase):

    def test_root(self):
        r = self.client.get("/")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["message"], "OK")

    def test_localities(self):
        r = self.client.get("/localities")
        self.assertEqual([l["name"] for l in r.json()], ["A", "B", "C"])


class TestAlerts(RouteTestCase):

    def test_list_enriches_alerts(self):
        r = self.client.get("/alerts")
        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertEqual(len(body), 3)

        first = body[0]
        self.assertEqual(first["alert"]["_id"], "a1")
        self.assertEqual(first["coordinate"], {"lat": 12.05, "lng": 77.05})
        self.assertEqual(first["video_url"], "https://firebasestorage.example/v/a1.mp4")
        self.assertEqual(first["video_source"], "primary_url")

        second = body[1]
        self.assertIsNone(second["coordinate"])
        self.assertEqual(second["video_source"], "raw_reference_hash")

        third = body[2]
        self.assertIsNone(third["coordinate"])
        self.assertIsNone(third["video_url"])

    def test_upstream_failure_is_502(self):
        req = httpx.Request("GET", "http://upstream/fetch-alerts")
        self.fake.error = httpx.ConnectError("refused", request=req)
        r = self.client.get("/alerts")
        self.assertEqual(r.status_code, 502)

    def test_delete(self):
        r = self.client.delete("/alerts/a1")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(self.fake.deleted, ["a1"])

    def test_delete_refused(self):
        self.fake.delete_ok = False
        r = self.client.delete("/alerts/zzz")
        self.assertEqual(r.status_code, 404)


class TestLocateAndNearest(RouteTestCase):

    def test_locate(self):
        r = self.client.post("/alerts/locate", json={"coordinates": {"lat": 12.9716, "lng": 77.5946}})
        body = r.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["map_url"], "https://www.google.com/maps?q=12.9716,77.5946&z=15&output=embed")

    def test_locate_invalid(self):
        r = self.client.post("/alerts/locate", json={"coordinates": "12.5"})
        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertEqual(body["status"], "coordinates_unavailable")
        self.assertIsNone(body["map_url"])

    def test_nearest_scenario(self):
        r = self.client.post("/alerts/nearest-cctvs", json={"coordinates": "12.05,77.05", "locality": "X", "k": 2})
        body = r.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["locality"], "X")
        self.assertEqual([c["locality"]["name"] for c in body["cameras"]], ["B", "A"])
        self.assertTrue(all(c["feed_url"] for c in body["cameras"]))

    def test_nearest_default_k_caps_at_catalog(self):
        r = self.client.post("/alerts/nearest-cctvs", json={"coordinates": {"lat": 0, "lng": 0}, "locality": "X"})
        self.assertEqual(len(r.json()["cameras"]), 3)

    def test_nearest_accepts_alert_location_field(self):
        r = self.client.post("/alerts/nearest-cctvs", json={"coordinates": "12.05,77.05", "location": "Koramangala"})
        body = r.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["locality"], "Koramangala")

    def test_nearest_requires_locality(self):
        for payload in ({"coordinates": "12.05,77.05"}, {"coordinates": "12.05,77.05", "locality": "  "}):
            with self.subTest(payload=payload):
                body = self.client.post("/alerts/nearest-cctvs", json=payload).json()
                self.assertEqual(body["status"], "locality_unavailable")
                self.assertEqual(body["cameras"], [])

    def test_nearest_invalid_coordinates(self):
        r = self.client.post("/alerts/nearest-cctvs", json={"coordinates": None, "locality": "X"})
        body = r.json()
        self.assertEqual(body["status"], "coordinates_unavailable")
        self.assertEqual(body["cameras"], [])

    def test_nearest_rejects_zero_k(self):
        r = self.client.post("/alerts/nearest-cctvs", json={"coordinates": "1,1", "k": 0})
        self.assertEqual(r.status_code, 422)


class TestFootage(RouteTestCase):

    def test_footage_precedence(self):
        r = self.client.post("/alerts/footage", json={
            "primaryUrl": "https://cdn.example/video.mp4",
            "legacyUrl": "https://gateway.old/x",
            "rawReference": "QmHash123",
        })
        body = r.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["url"], "https://cdn.example/video.mp4")
        self.assertEqual(body["source"], "primary_url")

    def test_footage_alert_field_names(self):
        r = self.client.post("/alerts/footage", json={"footageUrl": "QmHash123"})
        self.assertEqual(r.json()["url"], "https://gateway.pinata.cloud/ipfs/QmHash123")

    def test_footage_unavailable(self):
        r = self.client.post("/alerts/footage", json={})
        body = r.json()
        self.assertEqual(body["status"], "footage_unavailable")
        self.assertIsNone(body["url"])


if __name__ == '__main__':
    unittest.main()
