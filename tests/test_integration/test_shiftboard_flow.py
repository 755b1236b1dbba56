import unittest
from datetime import datetime, timezone

from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from main import app
from core.clock import FixedClock
from core.database import build_engine, init_db
from core.unit_of_work import UnitOfWork, get_uow

# Monday before the first Friday service
NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class ShiftboardFlowTests(unittest.TestCase):
    def setUp(self):
        self.engine = build_engine("sqlite:///:memory:")
        init_db(bind=self.engine)
        Session = sessionmaker(bind=self.engine, autocommit=False, autoflush=False, future=True)
        self.clock = FixedClock(NOW)

        def _uow():
            with UnitOfWork(Session, clock=self.clock) as uow:
                yield uow

        app.dependency_overrides[get_uow] = _uow
        self.client = TestClient(app)

        resp = self.client.post(
            "/api/tenants", json={"name": "Cafe One", "timezone": "UTC"}, headers={"X-System-Admin": "true"}
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        self.headers = {"X-Tenant-ID": resp.json()["id"], "X-Admin-ID": "admin-1"}

    def tearDown(self):
        app.dependency_overrides.pop(get_uow, None)
        self.engine.dispose()

    def post(self, url, body=None, expect=201):
        resp = self.client.post(url, json=body, headers=self.headers)
        self.assertEqual(resp.status_code, expect, resp.text)
        return resp.json() if resp.content else None

    def put(self, url, body, expect=200):
        resp = self.client.put(url, json=body, headers=self.headers)
        self.assertEqual(resp.status_code, expect, resp.text)
        return resp.json()

    def get(self, url, expect=200, **params):
        resp = self.client.get(url, params=params, headers=self.headers)
        self.assertEqual(resp.status_code, expect, resp.text)
        return resp.json()

    def test_plan_finalize_and_announce(self):
        # --- directory ---
        cashier = self.post("/api/roles", {"name": "Cashier", "default_capacity": 1})
        anna = self.post("/api/members", {"display_name": "Anna", "role_ids": [cashier["id"]]})
        bjorn = self.post("/api/members", {"display_name": "Bjorn", "role_ids": [cashier["id"]]})

        template = self.post(
            "/api/templates",
            {
                "name": "Friday service",
                "recurrence": {"kind": "weekly", "start_date": "2026-03-06"},
                "response_deadline_hours": 24,
                "slots": [
                    {"name": "Morning till", "role_id": cashier["id"], "start_time": "09:00", "end_time": "13:00"}
                ],
            },
        )
        self.assertEqual(template["recurrence"]["weekday"], 4)

        # --- business day ---
        day = self.post("/api/business-days", {"template_id": template["id"], "date": "2026-03-06"})
        self.assertFalse(day["is_locked"])
        self.assertEqual(len(day["slots"]), 1)
        slot_id = day["slots"][0]["id"]
        self.assertEqual(day["slots"][0]["capacity"], 1)

        listed = self.get("/api/business-days", start="2026-03-01", end="2026-03-31")
        self.assertEqual([d["id"] for d in listed], [day["id"]])

        generated = self.post(
            "/api/business-days/generate",
            {"template_id": template["id"], "start": "2026-03-01", "end": "2026-03-31"},
            expect=200,
        )
        # the 6th already exists
        self.assertEqual(generated, {"created": 3, "skipped": 1})
        listed = self.get("/api/business-days", start="2026-03-01", end="2026-03-31")
        self.assertEqual([d["date"] for d in listed], ["2026-03-06", "2026-03-13", "2026-03-20", "2026-03-27"])
        self.assertEqual(listed[0]["id"], day["id"])

        # --- attendance ---
        self.put(f"/api/business-days/{day['id']}/attendance/{anna['id']}", {"status": "available"})
        self.put(f"/api/business-days/{day['id']}/attendance/{bjorn['id']}", {"status": "unavailable"})
        responses = self.get(f"/api/business-days/{day['id']}/attendance")
        self.assertEqual(len(responses), 2)

        # --- finalize ---
        url = f"/api/business-days/{day['id']}/adjustment"
        early = {"assignments": [{"shift_slot_id": slot_id, "member_id": anna["id"]}]}
        err = self.put(url, early, expect=422)
        self.assertEqual(err["error"]["code"], "RESPONSE_WINDOW_OPEN")

        # responses closed at 00:00 on the 5th
        self.clock.set(datetime(2026, 3, 5, 1, 0, tzinfo=timezone.utc))
        err = self.put(url, {"assignments": [{"shift_slot_id": slot_id, "member_id": bjorn["id"]}]}, expect=422)
        self.assertEqual(err["error"]["code"], "INELIGIBLE_ASSIGNMENT")

        err = self.put(
            url,
            {
                "assignments": [
                    {"shift_slot_id": slot_id, "member_id": anna["id"]},
                    {"shift_slot_id": slot_id, "member_id": bjorn["id"]},
                ]
            },
            expect=422,
        )
        self.assertEqual(err["error"]["code"], "CAPACITY_EXCEEDED")
        self.get(f"/api/calendar/{day['id']}", expect=404)

        adjustment = self.put(url, {"assignments": [{"shift_slot_id": slot_id, "member_id": anna["id"]}]})
        self.assertEqual(adjustment["created_by"], "admin-1")

        locked = self.get(f"/api/business-days/{day['id']}")
        self.assertTrue(locked["is_locked"])

        err = self.put(url, {"assignments": [{"shift_slot_id": slot_id, "member_id": anna["id"]}]}, expect=409)
        self.assertEqual(err["error"]["code"], "BUSINESS_DAY_LOCKED")

        err = self.put(
            f"/api/business-days/{day['id']}/attendance/{bjorn['id']}", {"status": "available"}, expect=422
        )
        self.assertEqual(err["error"]["code"], "BUSINESS_DAY_LOCKED")

        # --- calendar ---
        calendar = self.get(f"/api/calendar/{day['id']}")
        self.assertEqual(calendar["finalized_by"], "admin-1")
        self.assertEqual(calendar["slots"][0]["members"], [{"member_id": anna["id"], "display_name": "Anna"}])
        self.assertEqual(len(self.get("/api/calendar", start="2026-03-01", end="2026-03-31")), 1)

        # --- announcements ---
        note = self.post("/api/announcements", {"title": "Friday is set", "body": "See the calendar."})
        self.assertEqual(self.get("/api/announcements/unread-count"), {"count": 1})
        feed = self.get("/api/announcements")
        self.assertEqual([(a["id"], a["is_read"]) for a in feed], [(note["id"], False)])

        self.post(f"/api/announcements/{note['id']}/read", expect=204)
        self.post(f"/api/announcements/{note['id']}/read", expect=204)
        self.assertEqual(self.get("/api/announcements/unread-count"), {"count": 0})

        # another admin of the same tenant still has it unread
        self.headers["X-Admin-ID"] = "admin-2"
        self.assertEqual(self.get("/api/announcements/unread-count"), {"count": 1})

    def test_other_tenant_sees_nothing(self):
        role = self.post("/api/roles", {"name": "Cashier"})

        resp = self.client.post("/api/tenants", json={"name": "Cafe Two"}, headers={"X-System-Admin": "yes"})
        self.headers = {"X-Tenant-ID": resp.json()["id"], "X-Admin-ID": "admin-9"}

        self.assertEqual(self.get("/api/roles"), [])
        err = self.get(f"/api/roles/{role['id']}", expect=404)
        self.assertEqual(err["error"]["code"], "NOT_FOUND")


if __name__ == "__main__":
    unittest.main()
