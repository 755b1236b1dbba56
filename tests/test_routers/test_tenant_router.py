import unittest
from datetime import datetime, timezone
from types import SimpleNamespace as Obj
from unittest.mock import patch

from fastapi.testclient import TestClient

from main import app
from core.unit_of_work import get_uow
from authz.deps import Principal, get_current_admin

NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class TenantRouterTests(unittest.TestCase):
    def setUp(self):
        def _fake_uow():
            yield Obj()

        app.dependency_overrides[get_uow] = _fake_uow
        app.dependency_overrides[get_current_admin] = lambda: Principal(tenant_id="t1", admin_id="admin-1")
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_uow, None)
        app.dependency_overrides.pop(get_current_admin, None)

    @patch("tenant.router.service.get_tenant")
    def test_me(self, mock_get):
        mock_get.return_value = Obj(id="t1", name="Cafe", timezone="UTC", created_at=NOW, updated_at=NOW)
        resp = self.client.get("/api/tenants/me")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["name"], "Cafe")

    def test_provision_requires_system_admin(self):
        resp = self.client.post("/api/tenants", json={"name": "Cafe"})
        self.assertEqual(resp.status_code, 403)

    @patch("tenant.router.service.create_tenant")
    def test_provision(self, mock_create):
        mock_create.return_value = Obj(id="t2", name="Cafe", timezone="UTC", created_at=NOW, updated_at=NOW)
        resp = self.client.post("/api/tenants", json={"name": "Cafe"}, headers={"X-System-Admin": "1"})
        self.assertEqual(resp.status_code, 201, resp.text)
        self.assertEqual(mock_create.call_args.args[1:], ("Cafe", None))


if __name__ == "__main__":
    unittest.main()
