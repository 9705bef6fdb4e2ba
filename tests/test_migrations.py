import importlib.util
from pathlib import Path

import sqlalchemy as sa
from alembic.migration import MigrationContext
from alembic.operations import Operations

from models import db

REVISION = Path(__file__).resolve().parent.parent / "migrations" / "versions" / "20261019_01_initial_schema.py"


def _load_revision():
    spec = importlib.util.spec_from_file_location("initial_schema", REVISION)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _upgraded_engine():
    engine = sa.create_engine("sqlite://")
    revision = _load_revision()
    with engine.begin() as conn:
        with Operations.context(MigrationContext.configure(conn)):
            revision.upgrade()
    return engine


def test_initial_revision_creates_model_tables():
    inspector = sa.inspect(_upgraded_engine())
    assert set(inspector.get_table_names()) == set(db.metadata.tables)


def test_teacher_email_has_a_single_unique_index():
    inspector = sa.inspect(_upgraded_engine())
    email_indexes = [ix for ix in inspector.get_indexes("teachers") if ix["column_names"] == ["email"]]
    assert len(email_indexes) == 1
    assert email_indexes[0]["name"] == "ix_teachers_email"
    assert bool(email_indexes[0]["unique"])
    assert inspector.get_unique_constraints("teachers") == []
