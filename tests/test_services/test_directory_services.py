import unittest
from datetime import date

from core.errors import NotFoundError, ValidationError
from member import service as member_service
from role import service as role_service
from template import service as template_service
from template.domain import Recurrence
from tenant import service as tenant_service
from tests.support import FRIDAY, DbTestCase, slot


class TenantServiceTests(DbTestCase):
    def test_create_defaults_timezone(self):
        t = tenant_service.create_tenant(self.uow, "Cafe")
        self.assertEqual(t.timezone, "UTC")
        self.assertEqual(tenant_service.get_tenant(self.uow, t.id).name, "Cafe")

    def test_update_and_delete(self):
        t = self.seed_tenant()
        updated = tenant_service.update_tenant(self.uow, t.id, name="Cafe Renamed")
        self.assertEqual(updated.name, "Cafe Renamed")
        self.assertEqual(updated.timezone, "Atlantic/Reykjavik")

        tenant_service.delete_tenant(self.uow, t.id)
        with self.assertRaises(NotFoundError):
            tenant_service.get_tenant(self.uow, t.id)

    def test_bad_timezone_on_update(self):
        t = self.seed_tenant()
        with self.assertRaises(ValidationError):
            tenant_service.update_tenant(self.uow, t.id, timezone="Nowhere/Special")


class RoleServiceTests(DbTestCase):
    def setUp(self):
        super().setUp()
        self.tid = self.seed_tenant().id

    def test_list_in_display_order(self):
        role_service.create_role(self.uow, self.tid, "Barista", display_order=2)
        role_service.create_role(self.uow, self.tid, "Cashier", display_order=1)
        self.assertEqual([r.name for r in role_service.list_roles(self.uow, self.tid)], ["Cashier", "Barista"])

    def test_duplicate_name_rejected(self):
        role_service.create_role(self.uow, self.tid, "Cashier")
        with self.assertRaises(ValidationError) as cm:
            role_service.create_role(self.uow, self.tid, " Cashier ")
        self.assertEqual(cm.exception.code, "DUPLICATE_ROLE_NAME")

    def test_same_name_in_other_tenant_allowed(self):
        other = self.seed_tenant("Cafe Two").id
        role_service.create_role(self.uow, self.tid, "Cashier")
        role_service.create_role(self.uow, other, "Cashier")

    def test_name_reusable_after_delete(self):
        role = role_service.create_role(self.uow, self.tid, "Cashier")
        role_service.delete_role(self.uow, self.tid, role.id)
        again = role_service.create_role(self.uow, self.tid, "Cashier")
        self.assertNotEqual(again.id, role.id)
        with self.assertRaises(NotFoundError):
            role_service.get_role(self.uow, self.tid, role.id)

    def test_update_keeps_unset_fields(self):
        role = role_service.create_role(self.uow, self.tid, "Cashier", default_capacity=2, description="Till")
        updated = role_service.update_role(self.uow, self.tid, role.id, name="Head cashier")
        self.assertEqual(updated.name, "Head cashier")
        self.assertEqual(updated.default_capacity, 2)
        self.assertEqual(updated.description, "Till")


class MemberServiceTests(DbTestCase):
    def setUp(self):
        super().setUp()
        self.tid = self.seed_tenant().id
        self.cashier = self.seed_role(self.tid, "Cashier")
        self.barista = self.seed_role(self.tid, "Barista")

    def test_create_with_roles(self):
        m = self.seed_member(self.tid, "Anna", [self.cashier.id])
        with self.new_uow() as uow:
            stored = member_service.get_member(uow, self.tid, m.id)
        self.assertEqual(stored.role_ids, frozenset({self.cashier.id}))

    def test_unknown_role_rejected(self):
        with self.assertRaises(NotFoundError):
            self.seed_member(self.tid, "Anna", ["missing"])

    def test_role_of_other_tenant_rejected(self):
        other = self.seed_tenant("Cafe Two").id
        foreign = self.seed_role(other, "Cashier")
        with self.assertRaises(NotFoundError):
            self.seed_member(self.tid, "Anna", [foreign.id])

    def test_assign_roles_replaces_set(self):
        m = self.seed_member(self.tid, "Anna", [self.cashier.id])
        member_service.assign_roles(self.uow, self.tid, m.id, [self.barista.id])
        with self.new_uow() as uow:
            stored = member_service.get_member(uow, self.tid, m.id)
        self.assertEqual(stored.role_ids, frozenset({self.barista.id}))

    def test_inactive_members_hidden_by_default(self):
        a = self.seed_member(self.tid, "Anna")
        b = self.seed_member(self.tid, "Bjorn")
        member_service.update_member(self.uow, self.tid, b.id, is_active=False)
        self.assertEqual([m.id for m in member_service.list_members(self.uow, self.tid)], [a.id])
        self.assertEqual(
            {m.id for m in member_service.list_members(self.uow, self.tid, include_inactive=True)}, {a.id, b.id}
        )

    def test_delete_member(self):
        m = self.seed_member(self.tid, "Anna")
        member_service.delete_member(self.uow, self.tid, m.id)
        with self.assertRaises(NotFoundError):
            member_service.get_member(self.uow, self.tid, m.id)


class TemplateServiceTests(DbTestCase):
    def setUp(self):
        super().setUp()
        self.tid = self.seed_tenant().id
        self.cashier = self.seed_role(self.tid, "Cashier")

    def test_create_and_read_back(self):
        tpl = self.seed_template(
            self.tid,
            [slot("Morning", self.cashier.id, (9, 0), (13, 0), capacity=2), slot("Late", self.cashier.id, (13, 0), (17, 0))],
            kind="biweekly",
        )
        with self.new_uow() as uow:
            stored = template_service.get_template(uow, self.tid, tpl.id)
        self.assertEqual(stored.recurrence, Recurrence.of("biweekly", FRIDAY))
        self.assertEqual([s.name for s in stored.slots], ["Morning", "Late"])
        self.assertEqual(stored.slots[0].capacity, 2)
        self.assertIsNone(stored.slots[1].capacity)

    def test_slot_role_must_belong_to_tenant(self):
        with self.assertRaises(NotFoundError):
            self.seed_template(self.tid, [slot("Morning", "missing", (9, 0), (13, 0))])

    def test_update_recurrence(self):
        tpl = self.seed_template(self.tid, [slot("Morning", self.cashier.id, (9, 0), (13, 0))])
        updated = template_service.update_template(
            self.uow, self.tid, tpl.id, recurrence=Recurrence.of("none", date(2026, 4, 1)), response_deadline_hours=48
        )
        self.assertEqual(updated.recurrence.start_date, date(2026, 4, 1))
        self.assertEqual(updated.response_deadline_hours, 48)
        self.assertEqual(len(updated.slots), 1)

    def test_delete_template(self):
        tpl = self.seed_template(self.tid, [slot("Morning", self.cashier.id, (9, 0), (13, 0))])
        template_service.delete_template(self.uow, self.tid, tpl.id)
        self.assertEqual(template_service.list_templates(self.uow, self.tid), [])
        with self.assertRaises(NotFoundError):
            template_service.get_template(self.uow, self.tid, tpl.id)


if __name__ == "__main__":
    unittest.main()
