import importlib.util
import unittest
from pathlib import Path

from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import inspect

import models_bootstrap  # noqa: F401
from core.database import Base, build_engine

MIGRATION = (
    Path(__file__).resolve().parents[2] / "alembic" / "versions" / "3c9e1f0a7b21_initial_shiftboard_schema.py"
)


def load_migration():
    spec = importlib.util.spec_from_file_location("initial_shiftboard_schema", MIGRATION)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class InitialMigrationTests(unittest.TestCase):
    def setUp(self):
        self.engine = build_engine("sqlite:///:memory:")
        self.migration = load_migration()

    def tearDown(self):
        self.engine.dispose()

    def run_step(self, step):
        with self.engine.begin() as conn:
            with Operations.context(MigrationContext.configure(conn)):
                step()

    def test_upgrade_creates_every_mapped_table(self):
        self.run_step(self.migration.upgrade)
        tables = set(inspect(self.engine).get_table_names())
        self.assertEqual(tables, set(Base.metadata.tables))

    def test_upgrade_matches_mapped_columns(self):
        self.run_step(self.migration.upgrade)
        inspector = inspect(self.engine)
        for name, table in Base.metadata.tables.items():
            with self.subTest(table=name):
                columns = {c["name"] for c in inspector.get_columns(name)}
                self.assertEqual(columns, {c.name for c in table.columns})

    def test_downgrade_drops_everything(self):
        self.run_step(self.migration.upgrade)
        self.run_step(self.migration.downgrade)
        self.assertEqual(inspect(self.engine).get_table_names(), [])


if __name__ == "__main__":
    unittest.main()
