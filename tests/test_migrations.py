"""
Tests that the Alembic baseline builds the same schema the models describe.
"""
from sqlalchemy import create_engine, inspect

from jobhunt.db.migrate import run_migrations


def test_upgrade_head_creates_schema(tmp_path):
    database_url = f"sqlite:///{tmp_path / 'migrated.db'}"

    run_migrations(database_url)

    engine = create_engine(database_url)
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names())
        assert {"users", "jobs", "bullets", "experience", "experience_bullets"} <= tables

        unique_names = {u["name"] for u in inspector.get_unique_constraints("experience_bullets")}
        assert "uq_experience_bullet" in unique_names

        foreign_keys = inspector.get_foreign_keys("experience_bullets")
        assert {fk["referred_table"] for fk in foreign_keys} == {"experience", "bullets"}
        assert all(fk["options"].get("ondelete") == "CASCADE" for fk in foreign_keys)
    finally:
        engine.dispose()


def test_upgrade_head_is_repeatable(tmp_path):
    database_url = f"sqlite:///{tmp_path / 'twice.db'}"

    run_migrations(database_url)
    run_migrations(database_url)

    engine = create_engine(database_url)
    try:
        assert "experience_bullets" in inspect(engine).get_table_names()
    finally:
        engine.dispose()
