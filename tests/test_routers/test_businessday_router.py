import unittest
from datetime import date, datetime, time, timezone
from types import SimpleNamespace as Obj
from unittest.mock import patch

from fastapi.testclient import TestClient

from main import app
from core.errors import NotFoundError, ValidationError
from core.unit_of_work import get_uow
from authz.deps import Principal, get_current_admin

NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


def business_day(**kw):
    data = dict(
        id="bd1",
        tenant_id="t1",
        template_id="tpl1",
        date=date(2026, 3, 6),
        response_deadline=datetime(2026, 3, 5, tzinfo=timezone.utc),
        locked_at=None,
        is_locked=False,
        version=1,
        slots=[
            Obj(
                id="s1", role_id="r1", name="Morning till", capacity=1,
                start_at=datetime(2026, 3, 6, 9, tzinfo=timezone.utc),
                end_at=datetime(2026, 3, 6, 13, tzinfo=timezone.utc),
            )
        ],
        created_at=NOW,
        updated_at=NOW,
    )
    data.update(kw)
    return Obj(**data)


class BusinessDayRouterTests(unittest.TestCase):
    def setUp(self):
        def _fake_uow():
            yield Obj()

        app.dependency_overrides[get_uow] = _fake_uow
        app.dependency_overrides[get_current_admin] = lambda: Principal(tenant_id="t1", admin_id="admin-1")
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_uow, None)
        app.dependency_overrides.pop(get_current_admin, None)

    @patch("businessday.router.service.list_business_days")
    def test_list_requires_range(self, mock_list):
        resp = self.client.get("/api/business-days")
        self.assertEqual(resp.status_code, 422)
        mock_list.assert_not_called()

    @patch("businessday.router.service.list_business_days")
    def test_list_in_range(self, mock_list):
        mock_list.return_value = [business_day()]
        resp = self.client.get("/api/business-days", params={"start": "2026-03-01", "end": "2026-03-31"})
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(body[0]["date"], "2026-03-06")
        self.assertEqual(body[0]["slots"][0]["name"], "Morning till")
        args = mock_list.call_args
        self.assertEqual(args.args[1:], ("t1", date(2026, 3, 1), date(2026, 3, 31)))
        self.assertIsNone(args.kwargs["template_id"])

    @patch("businessday.router.service.create_business_day")
    def test_create_201(self, mock_create):
        mock_create.return_value = business_day()
        resp = self.client.post("/api/business-days", json={"template_id": "tpl1", "date": "2026-03-06"})
        self.assertEqual(resp.status_code, 201, resp.text)
        self.assertEqual(mock_create.call_args.args[1:], ("t1", "tpl1", date(2026, 3, 6)))

    @patch("businessday.router.service.create_business_day")
    def test_create_duplicate(self, mock_create):
        mock_create.side_effect = ValidationError("exists", code="DUPLICATE_BUSINESS_DAY")
        resp = self.client.post("/api/business-days", json={"template_id": "tpl1", "date": "2026-03-06"})
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(resp.json()["error"]["code"], "DUPLICATE_BUSINESS_DAY")

    @patch("businessday.router.service.generate_business_days")
    def test_generate(self, mock_generate):
        mock_generate.return_value = {"created": 3, "skipped": 1}
        resp = self.client.post(
            "/api/business-days/generate",
            json={"template_id": "tpl1", "start": "2026-03-01", "end": "2026-03-31"},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json(), {"created": 3, "skipped": 1})

    def test_generate_rejects_inverted_range(self):
        resp = self.client.post(
            "/api/business-days/generate",
            json={"template_id": "tpl1", "start": "2026-03-31", "end": "2026-03-01"},
        )
        self.assertEqual(resp.status_code, 422)

    @patch("businessday.router.service.get_business_day")
    def test_detail_404(self, mock_get):
        mock_get.side_effect = NotFoundError("business day", "bd9")
        resp = self.client.get("/api/business-days/bd9")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["error"]["details"]["resource"], "business day")

    @patch("businessday.router.service.add_slot")
    def test_add_slot(self, mock_add):
        mock_add.return_value = business_day(version=2)
        resp = self.client.post(
            "/api/business-days/bd1/slots",
            json={"name": "Closing", "role_id": "r1", "start_time": "18:00", "end_time": "22:00"},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        kwargs = mock_add.call_args.kwargs
        self.assertEqual(kwargs["start_time"], time(18, 0))
        self.assertIsNone(kwargs["capacity"])

    @patch("businessday.router.service.update_slot")
    def test_patch_slot_only_set_fields(self, mock_update):
        mock_update.return_value = business_day(version=2)
        resp = self.client.patch("/api/business-days/bd1/slots/s1", json={"capacity": 3})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(mock_update.call_args.kwargs, {"capacity": 3})

    @patch("businessday.router.service.remove_slot")
    def test_remove_last_slot(self, mock_remove):
        mock_remove.side_effect = ValidationError("a business day needs at least one shift slot", code="LAST_SLOT")
        resp = self.client.delete("/api/business-days/bd1/slots/s1")
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(resp.json()["error"]["code"], "LAST_SLOT")


if __name__ == "__main__":
    unittest.main()
