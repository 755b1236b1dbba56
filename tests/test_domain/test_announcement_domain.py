import unittest
from datetime import datetime, timedelta, timezone

from hypothesis import given, strategies as st

from announcement.domain import (
    TITLE_MAX_LENGTH,
    Announcement,
    GlobalScope,
    TenantScope,
    scope_of,
    scope_tenant_id,
)
from core.errors import ValidationError

NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class AnnouncementScopeTests(unittest.TestCase):
    def test_scope_round_trip(self):
        self.assertIsNone(scope_tenant_id(GlobalScope()))
        self.assertEqual(scope_tenant_id(TenantScope("t1")), "t1")
        self.assertEqual(scope_of(None), GlobalScope())
        self.assertEqual(scope_of("t1"), TenantScope("t1"))

    def test_unknown_scope_is_a_type_error(self):
        with self.assertRaises(TypeError):
            scope_tenant_id("t1")
        with self.assertRaises(TypeError):
            Announcement.create(NOW, None, "Hello", "World")

    def test_tenant_scope_needs_id(self):
        with self.assertRaises(ValidationError):
            TenantScope("")

    def test_visibility(self):
        glob = Announcement.create(NOW, GlobalScope(), "All", "Everyone")
        mine = Announcement.create(NOW, TenantScope("t1"), "Mine", "Only t1")
        self.assertTrue(glob.is_for_all_tenants())
        self.assertTrue(glob.is_visible_to("t2"))
        self.assertTrue(mine.is_visible_to("t1"))
        self.assertFalse(mine.is_visible_to("t2"))
        self.assertEqual(mine.tenant_id, "t1")


class AnnouncementLifecycleTests(unittest.TestCase):
    def test_defaults_to_published_now(self):
        a = Announcement.create(NOW, GlobalScope(), "Hello", "World")
        self.assertEqual(a.published_at, NOW)
        self.assertTrue(a.is_published(NOW))

    def test_scheduled_announcement_not_yet_published(self):
        a = Announcement.create(NOW, GlobalScope(), "Soon", "Later", NOW + timedelta(hours=1))
        self.assertFalse(a.is_published(NOW))
        self.assertTrue(a.is_published(NOW + timedelta(hours=1)))

    def test_offset_published_at_normalized_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        a = Announcement.create(NOW, GlobalScope(), "Hi", "There", datetime(2026, 3, 2, 12, 0, tzinfo=plus_two))
        self.assertEqual(a.published_at, datetime(2026, 3, 2, 10, 0, tzinfo=timezone.utc))
        self.assertEqual(a.published_at.utcoffset(), timedelta(0))

    def test_deleted_is_never_published(self):
        a = Announcement.create(NOW, GlobalScope(), "Hello", "World")
        a.delete(NOW)
        self.assertFalse(a.is_published(NOW + timedelta(days=1)))

    def test_update_validates(self):
        a = Announcement.create(NOW, TenantScope("t1"), "Hello", "World")
        with self.assertRaises(ValidationError) as cm:
            a.update(NOW, title="Hello", body="", published_at=NOW)
        self.assertEqual(cm.exception.code, "BODY_REQUIRED")
        self.assertEqual(a.body, "World")

    def test_empty_title_rejected(self):
        with self.assertRaises(ValidationError) as cm:
            Announcement.create(NOW, GlobalScope(), "", "World")
        self.assertEqual(cm.exception.code, "TITLE_REQUIRED")


class AnnouncementTitleProperties(unittest.TestCase):
    @given(title=st.text(min_size=1, max_size=TITLE_MAX_LENGTH), offset=st.integers(min_value=0, max_value=10_000))
    def test_titles_within_limit_are_accepted(self, title, offset):
        published_at = NOW + timedelta(minutes=offset)
        a = Announcement.create(NOW, GlobalScope(), title, "body", published_at)
        self.assertEqual(a.title, title)
        self.assertTrue(a.is_published(published_at))
        self.assertEqual(a.is_published(NOW), offset == 0)

    @given(title=st.text(min_size=TITLE_MAX_LENGTH + 1, max_size=TITLE_MAX_LENGTH + 50))
    def test_titles_over_limit_are_rejected(self, title):
        with self.assertRaises(ValidationError) as cm:
            Announcement.create(NOW, TenantScope("t1"), title, "body")
        self.assertEqual(cm.exception.code, "TITLE_TOO_LONG")


if __name__ == "__main__":
    unittest.main()
