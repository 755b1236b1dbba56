"""Shared fixtures for service, router and integration tests."""
import unittest
from datetime import date, datetime, time, timezone

from sqlalchemy.orm import sessionmaker

from core.clock import FixedClock
from core.database import build_engine, init_db
from core.unit_of_work import UnitOfWork
from template.domain import Recurrence, SlotBlueprint

from tenant import service as tenant_service
from role import service as role_service
from member import service as member_service
from template import service as template_service
from businessday import service as businessday_service

# Monday
NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
FRIDAY = date(2026, 3, 6)
# past the default response deadline of the FRIDAY day
AFTER_DEADLINE = datetime(2026, 3, 5, 6, 0, tzinfo=timezone.utc)


def make_engine():
    engine = build_engine("sqlite:///:memory:")
    init_db(bind=engine)
    return engine


class DbTestCase(unittest.TestCase):
    """In-memory SQLite, a fixed clock and one open unit of work per test."""

    def setUp(self):
        self.engine = make_engine()
        self.Session = sessionmaker(bind=self.engine, autocommit=False, autoflush=False, future=True)
        self.clock = FixedClock(NOW)
        self.uow = self.new_uow().open()

    def tearDown(self):
        self.uow.close()
        self.engine.dispose()

    def new_uow(self, **kwargs) -> UnitOfWork:
        kwargs.setdefault("clock", self.clock)
        return UnitOfWork(self.Session, **kwargs)

    # ---- seeding ----

    def seed_tenant(self, name="Cafe One", tz="Atlantic/Reykjavik"):
        return tenant_service.create_tenant(self.uow, name, tz)

    def seed_role(self, tenant_id, name="Cashier", default_capacity=1):
        return role_service.create_role(self.uow, tenant_id, name, default_capacity=default_capacity)

    def seed_member(self, tenant_id, name, role_ids=()):
        return member_service.create_member(self.uow, tenant_id, name, role_ids=role_ids)

    def seed_template(self, tenant_id, slots, kind="weekly", start=FRIDAY, deadline_hours=24):
        return template_service.create_template(
            self.uow,
            tenant_id,
            "Friday service",
            Recurrence.of(kind, start),
            slots,
            response_deadline_hours=deadline_hours,
        )

    def seed_day(self, tenant_id, template_id, day=FRIDAY):
        return businessday_service.create_business_day(self.uow, tenant_id, template_id, day)


def slot(name, role_id, start, end, capacity=None) -> SlotBlueprint:
    return SlotBlueprint(name=name, role_id=role_id, start_time=time(*start), end_time=time(*end), capacity=capacity)


class SchedulingTestCase(DbTestCase):
    """
    Tenant with a Cashier and a Barista role, three members and one Friday
    business day with two overlapping cashier slots and a later barista slot.
    """

    def setUp(self):
        super().setUp()
        self.tenant = self.seed_tenant()
        self.tid = self.tenant.id
        self.cashier = self.seed_role(self.tid, "Cashier", default_capacity=1)
        self.barista = self.seed_role(self.tid, "Barista", default_capacity=2)
        self.m1 = self.seed_member(self.tid, "Anna", [self.cashier.id])
        self.m2 = self.seed_member(self.tid, "Bjorn", [self.barista.id])
        self.m3 = self.seed_member(self.tid, "Cleo", [self.cashier.id, self.barista.id])
        self.template = self.seed_template(
            self.tid,
            [
                slot("Morning till", self.cashier.id, (9, 0), (13, 0)),
                slot("Late morning till", self.cashier.id, (11, 0), (15, 0), capacity=2),
                slot("Afternoon bar", self.barista.id, (14, 0), (18, 0)),
            ],
        )
        self.day = self.seed_day(self.tid, self.template.id)
        by_name = {s.name: s for s in self.day.slots}
        self.s1 = by_name["Morning till"]
        self.s2 = by_name["Late morning till"]
        self.s3 = by_name["Afternoon bar"]
