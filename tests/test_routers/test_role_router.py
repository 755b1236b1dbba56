import unittest
from datetime import datetime, timezone
from types import SimpleNamespace as Obj
from unittest.mock import patch

from fastapi.testclient import TestClient

from main import app
from core.errors import NotFoundError, ValidationError
from core.unit_of_work import get_uow
from authz.deps import Principal, get_current_admin

NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


def role(**kw):
    data = dict(
        id="r1", tenant_id="t1", name="Cashier", description="", default_capacity=1, display_order=0,
        created_at=NOW, updated_at=NOW,
    )
    data.update(kw)
    return Obj(**data)


class RoleRouterTests(unittest.TestCase):
    def setUp(self):
        def _fake_uow():
            yield Obj()

        app.dependency_overrides[get_uow] = _fake_uow
        app.dependency_overrides[get_current_admin] = lambda: Principal(tenant_id="t1", admin_id="admin-1")
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_uow, None)
        app.dependency_overrides.pop(get_current_admin, None)

    # --- LIST ---

    @patch("role.router.service.list_roles")
    def test_list_roles_scoped_to_admin_tenant(self, mock_list):
        mock_list.return_value = [role(), role(id="r2", name="Barista", display_order=1)]
        resp = self.client.get("/api/roles")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual([r["name"] for r in resp.json()], ["Cashier", "Barista"])
        self.assertEqual(mock_list.call_args.args[1], "t1")

    @patch("role.router.service.get_role")
    def test_get_role_404_envelope(self, mock_get):
        mock_get.side_effect = NotFoundError("role", "nope")
        resp = self.client.get("/api/roles/nope")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(
            resp.json(),
            {"error": {"code": "NOT_FOUND", "message": "role not found", "details": {"resource": "role", "id": "nope"}}},
        )

    # --- CREATE ---

    @patch("role.router.service.create_role")
    def test_create_role_201(self, mock_create):
        mock_create.return_value = role(id="r9", name="Barista", default_capacity=2)
        resp = self.client.post("/api/roles", json={"name": "Barista", "default_capacity": 2})
        self.assertEqual(resp.status_code, 201, resp.text)
        self.assertEqual(resp.json()["id"], "r9")
        _, tenant_id = mock_create.call_args.args
        self.assertEqual(tenant_id, "t1")
        self.assertEqual(mock_create.call_args.kwargs["default_capacity"], 2)

    def test_create_role_rejects_tenant_in_body(self):
        resp = self.client.post("/api/roles", json={"name": "Barista", "tenant_id": "t2"})
        self.assertEqual(resp.status_code, 422)

    def test_create_role_rejects_zero_capacity(self):
        resp = self.client.post("/api/roles", json={"name": "Barista", "default_capacity": 0})
        self.assertEqual(resp.status_code, 422)

    @patch("role.router.service.create_role")
    def test_create_role_duplicate_name(self, mock_create):
        mock_create.side_effect = ValidationError("a role with this name already exists", code="DUPLICATE_ROLE_NAME")
        resp = self.client.post("/api/roles", json={"name": "Cashier"})
        self.assertEqual(resp.status_code, 422, resp.text)
        self.assertEqual(resp.json()["error"]["code"], "DUPLICATE_ROLE_NAME")

    # --- UPDATE / DELETE ---

    @patch("role.router.service.update_role")
    def test_patch_sends_only_set_fields(self, mock_update):
        mock_update.return_value = role(name="Head cashier")
        resp = self.client.patch("/api/roles/r1", json={"name": "Head cashier"})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(mock_update.call_args.kwargs, {"name": "Head cashier"})

    @patch("role.router.service.delete_role")
    def test_delete_role(self, mock_delete):
        resp = self.client.delete("/api/roles/r1")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"message": "role deleted"})
        mock_delete.assert_called_once()


class UnauthenticatedTests(unittest.TestCase):
    def setUp(self):
        def _fake_uow():
            yield Obj()

        app.dependency_overrides[get_uow] = _fake_uow
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_uow, None)

    def test_missing_headers_401(self):
        resp = self.client.get("/api/roles")
        self.assertEqual(resp.status_code, 401)

    def test_missing_admin_header_401(self):
        resp = self.client.get("/api/roles", headers={"X-Tenant-ID": "t1"})
        self.assertEqual(resp.status_code, 401)

    @patch("role.router.service.list_roles")
    def test_headers_become_principal(self, mock_list):
        mock_list.return_value = []
        resp = self.client.get("/api/roles", headers={"X-Tenant-ID": "t7", "X-Admin-ID": "a7"})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(mock_list.call_args.args[1], "t7")


if __name__ == "__main__":
    unittest.main()
