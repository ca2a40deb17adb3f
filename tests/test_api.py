import datetime as dt
import unittest

from fastapi.testclient import TestClient

from app.app_types import Signal, SignalValue
from app.config import Settings
from app.main import create_app
from app.signal_store.memory import InMemorySignalStore

PARIS = dt.timezone(dt.timedelta(hours=2))


def _signal(day: int, risk: int = 1) -> Signal:
    return Signal(
        generated_at=dt.datetime(2022, 6, 2, 21, 51, 1, tzinfo=PARIS),
        day=dt.datetime(2022, 6, day, tzinfo=PARIS),
        risk_level=risk,
        message=f"day {day}",
        values=(SignalValue(time_slot=0, value=risk), SignalValue(time_slot=1, value=risk)),
    )


class NoopLoop:
    def start(self):
        pass

    def stop(self, timeout=None):
        pass


class TestApi(unittest.TestCase):
    def setUp(self):
        self.store = InMemorySignalStore()
        self.settings = Settings(start_sync=False, api_key=None)
        self.app = create_app(self.settings, store=self.store, sync_loop=NoopLoop())
        self.client = TestClient(self.app)

    def test_list_signals_not_ready(self):
        resp = self.client.get("/v1/signals")
        self.assertEqual(resp.status_code, 503)

    def test_list_signals_uses_upstream_field_names(self):
        self.store.replace([_signal(3), _signal(4, risk=2)])
        resp = self.client.get("/v1/signals")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertIsInstance(data, list)
        self.assertEqual(len(data), 2)
        first = data[0]
        self.assertEqual(set(first), {"GenerationFichier", "jour", "dvalue", "message", "values"})
        self.assertTrue(first["jour"].startswith("2022-06-03T00:00:00"))
        self.assertEqual(data[1]["dvalue"], 2)
        self.assertEqual(first["values"][0], {"pas": 0, "hvalue": 1})

    def test_day_signal(self):
        self.store.replace([_signal(3), _signal(4), _signal(5), _signal(6)])
        resp = self.client.get("/v1/signals/1")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "day 4")

    def test_day_signal_out_of_range(self):
        self.store.replace([_signal(3), _signal(4)])
        self.assertEqual(self.client.get("/v1/signals/2").status_code, 404)
        self.assertEqual(self.client.get("/v1/signals/-1").status_code, 404)

    def test_day_signal_not_ready(self):
        self.assertEqual(self.client.get("/v1/signals/0").status_code, 503)

    def test_day_signal_rejects_non_integer(self):
        self.store.replace([_signal(3)])
        self.assertEqual(self.client.get("/v1/signals/today").status_code, 422)

    def test_unprefixed_routes_serve_the_same_data(self):
        self.store.replace([_signal(4), _signal(3)])
        listed = self.client.get("/signals")
        self.assertEqual(listed.status_code, 200)
        self.assertEqual(listed.json(), self.client.get("/v1/signals").json())
        self.assertEqual([s["message"] for s in listed.json()], ["day 4", "day 3"])
        day = self.client.get("/signals/1")
        self.assertEqual(day.status_code, 200)
        self.assertEqual(day.json()["message"], "day 3")
        self.assertEqual(self.client.get("/signals/2").status_code, 404)

    def test_unprefixed_routes_require_api_key_too(self):
        self.settings.api_key = "secret"
        self.store.replace([_signal(3)])
        self.assertEqual(self.client.get("/signals").status_code, 401)
        self.assertEqual(self.client.get("/signals", headers={"X-API-Key": "secret"}).status_code, 200)

    def test_health_reports_readiness(self):
        self.assertEqual(self.client.get("/health").json(), {"status": "ok", "ready": False})
        self.store.replace([_signal(3)])
        self.assertEqual(self.client.get("/health").json(), {"status": "ok", "ready": True})


class TestApiKey(unittest.TestCase):
    def setUp(self):
        self.store = InMemorySignalStore([_signal(3)])
        app = create_app(Settings(start_sync=False, api_key="secret"), store=self.store, sync_loop=NoopLoop())
        self.client = TestClient(app)

    def test_missing_key(self):
        self.assertEqual(self.client.get("/v1/signals").status_code, 401)

    def test_wrong_key(self):
        self.assertEqual(self.client.get("/v1/signals", headers={"X-API-Key": "nope"}).status_code, 401)

    def test_valid_key(self):
        resp = self.client.get("/v1/signals/0", headers={"X-API-Key": "secret"})
        self.assertEqual(resp.status_code, 200)

    def test_health_is_public(self):
        self.assertEqual(self.client.get("/health").status_code, 200)


if __name__ == "__main__":
    unittest.main()
