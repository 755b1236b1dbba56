import unittest
from datetime import datetime, timezone
from types import SimpleNamespace as Obj
from unittest.mock import patch

from fastapi.testclient import TestClient

from main import app
from attendance.domain import AttendanceStatus
from core.errors import ValidationError
from core.unit_of_work import get_uow
from authz.deps import Principal, get_current_admin

NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class AttendanceRouterTests(unittest.TestCase):
    def setUp(self):
        def _fake_uow():
            yield Obj()

        app.dependency_overrides[get_uow] = _fake_uow
        app.dependency_overrides[get_current_admin] = lambda: Principal(tenant_id="t1", admin_id="admin-1")
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_uow, None)
        app.dependency_overrides.pop(get_current_admin, None)

    @patch("attendance.router.service.submit_attendance")
    def test_put_attendance(self, mock_submit):
        mock_submit.return_value = Obj(
            id="at1", business_day_id="bd1", member_id="m1", status=AttendanceStatus.TENTATIVE,
            note="maybe late", submitted_at=NOW,
        )
        resp = self.client.put(
            "/api/business-days/bd1/attendance/m1", json={"status": "tentative", "note": "maybe late"}
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["status"], "tentative")
        self.assertEqual(mock_submit.call_args.args[1:], ("t1", "bd1", "m1", "tentative"))
        self.assertEqual(mock_submit.call_args.kwargs, {"note": "maybe late"})

    @patch("attendance.router.service.submit_attendance")
    def test_deadline_passed(self, mock_submit):
        mock_submit.side_effect = ValidationError("response deadline has passed", code="RESPONSE_DEADLINE_PASSED")
        resp = self.client.put("/api/business-days/bd1/attendance/m1", json={"status": "available"})
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(resp.json()["error"]["code"], "RESPONSE_DEADLINE_PASSED")

    def test_note_too_long(self):
        resp = self.client.put(
            "/api/business-days/bd1/attendance/m1", json={"status": "available", "note": "n" * 501}
        )
        self.assertEqual(resp.status_code, 422)

    @patch("attendance.router.service.list_attendance")
    def test_list(self, mock_list):
        mock_list.return_value = []
        resp = self.client.get("/api/business-days/bd1/attendance")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), [])


if __name__ == "__main__":
    unittest.main()
