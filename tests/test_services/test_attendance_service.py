import unittest
from datetime import timedelta

from hypothesis import given, settings, strategies as st
from sqlalchemy import func, select

from attendance import service
from attendance.domain import AttendanceStatus
from attendance.models import AttendanceRecord
from core.errors import NotFoundError, ValidationError
from member import service as member_service
from tests.support import SchedulingTestCase

statuses = st.sampled_from([s.value for s in AttendanceStatus])


class SubmitAttendanceTests(SchedulingTestCase):
    def rows_for(self, member_id):
        return self.uow.session.scalar(
            select(func.count())
            .select_from(AttendanceRecord)
            .where(AttendanceRecord.business_day_id == self.day.id, AttendanceRecord.member_id == member_id)
        )

    def test_submit_and_read_back(self):
        stored = service.submit_attendance(self.uow, self.tid, self.day.id, self.m1.id, "available", note="all day")
        self.assertIs(stored.status, AttendanceStatus.AVAILABLE)
        self.assertEqual(stored.note, "all day")
        self.assertEqual(stored.submitted_at, self.clock.now())

        fetched = service.get_member_attendance(self.uow, self.tid, self.day.id, self.m1.id)
        self.assertEqual(fetched.id, stored.id)

    @settings(max_examples=25, deadline=None)
    @given(sequence=st.lists(statuses, min_size=1, max_size=6))
    def test_resubmitting_keeps_one_record_with_latest_status(self, sequence):
        for i, status in enumerate(sequence):
            self.clock.advance(timedelta(seconds=1))
            service.submit_attendance(self.uow, self.tid, self.day.id, self.m2.id, status, note=f"#{i}")

        self.assertEqual(self.rows_for(self.m2.id), 1)
        latest = service.get_member_attendance(self.uow, self.tid, self.day.id, self.m2.id)
        self.assertEqual(latest.status.value, sequence[-1])
        self.assertEqual(latest.note, f"#{len(sequence) - 1}")
        self.assertEqual(latest.submitted_at, self.clock.now())

    def test_list_attendance_for_day(self):
        service.submit_attendance(self.uow, self.tid, self.day.id, self.m1.id, "available")
        self.clock.advance(timedelta(minutes=1))
        service.submit_attendance(self.uow, self.tid, self.day.id, self.m3.id, "tentative")
        rows = service.list_attendance(self.uow, self.tid, self.day.id)
        self.assertEqual([r.member_id for r in rows], [self.m1.id, self.m3.id])

    def test_invalid_status_rejected(self):
        with self.assertRaises(ValidationError) as cm:
            service.submit_attendance(self.uow, self.tid, self.day.id, self.m1.id, "perhaps")
        self.assertEqual(cm.exception.code, "INVALID_ATTENDANCE_STATUS")

    def test_deadline_passed(self):
        self.clock.set(self.day.response_deadline)
        service.submit_attendance(self.uow, self.tid, self.day.id, self.m1.id, "available")

        self.clock.advance(timedelta(seconds=1))
        with self.assertRaises(ValidationError) as cm:
            service.submit_attendance(self.uow, self.tid, self.day.id, self.m1.id, "unavailable")
        self.assertEqual(cm.exception.code, "RESPONSE_DEADLINE_PASSED")
        self.uow.rollback()
        stored = service.get_member_attendance(self.uow, self.tid, self.day.id, self.m1.id)
        self.assertIs(stored.status, AttendanceStatus.AVAILABLE)

    def test_inactive_member_cannot_respond(self):
        member_service.update_member(self.uow, self.tid, self.m1.id, is_active=False)
        with self.assertRaises(NotFoundError):
            service.submit_attendance(self.uow, self.tid, self.day.id, self.m1.id, "available")

    def test_other_tenant_cannot_see_or_submit(self):
        other = self.seed_tenant("Cafe Two")
        outsider = self.seed_member(other.id, "Outsider")
        with self.assertRaises(NotFoundError):
            service.submit_attendance(self.uow, other.id, self.day.id, outsider.id, "available")
        with self.assertRaises(NotFoundError):
            service.submit_attendance(self.uow, self.tid, self.day.id, outsider.id, "available")
        with self.assertRaises(NotFoundError):
            service.list_attendance(self.uow, other.id, self.day.id)

    def test_missing_response_not_found(self):
        with self.assertRaises(NotFoundError):
            service.get_member_attendance(self.uow, self.tid, self.day.id, self.m1.id)


if __name__ == "__main__":
    unittest.main()
