"""
Tests for the association storage adapter.
"""
import pytest
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobhunt.db.base import Base
from jobhunt.db.models import User, Bullet, Experience, ExperienceBullet
from jobhunt.db.storage import InsertOutcome, classify_integrity_error, insert_association


TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=test_engine)
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def pair(db):
    """An owned experience and bullet, committed."""
    user = User(email="storage@example.com", password_hash="not-a-real-hash")
    db.add(user)
    db.commit()

    experience = Experience(
        user_id=user.id,
        company_name="Acme",
        job_title="Engineer",
        start_date=date(2020, 1, 1),
        end_date=None,
        is_current=True,
    )
    bullet = Bullet(user_id=user.id, text="Kept the lights on")
    db.add_all([experience, bullet])
    db.commit()
    return experience.id, bullet.id


class _FakeDriverError(Exception):
    def __init__(self, message, pgcode=None):
        super().__init__(message)
        self.pgcode = pgcode


def _integrity_error(message, pgcode=None):
    return IntegrityError("INSERT INTO experience_bullets", {}, _FakeDriverError(message, pgcode))


def test_insert_association_ok(db, pair):
    experience_id, bullet_id = pair

    result = insert_association(db, experience_id, bullet_id)
    db.commit()

    assert result.ok
    assert result.outcome is InsertOutcome.OK
    assert result.row.id is not None
    assert db.query(ExperienceBullet).count() == 1


def test_insert_association_duplicate_is_conflict(db, pair):
    experience_id, bullet_id = pair
    insert_association(db, experience_id, bullet_id)
    db.commit()

    result = insert_association(db, experience_id, bullet_id)
    db.rollback()

    assert not result.ok
    assert result.outcome is InsertOutcome.CONFLICT
    assert isinstance(result.error, IntegrityError)
    assert db.query(ExperienceBullet).count() == 1


def test_insert_association_missing_parent_is_invalid_reference(db, pair):
    experience_id, _ = pair

    result = insert_association(db, experience_id, 987654)
    db.rollback()

    assert result.outcome is InsertOutcome.INVALID_REFERENCE
    assert db.query(ExperienceBullet).count() == 0


def test_classify_postgres_codes():
    assert classify_integrity_error(_integrity_error("dup", pgcode="23505")) is InsertOutcome.CONFLICT
    assert classify_integrity_error(_integrity_error("fk", pgcode="23503")) is InsertOutcome.INVALID_REFERENCE


def test_classify_sqlite_messages():
    unique = _integrity_error(
        "UNIQUE constraint failed: experience_bullets.experience_id, experience_bullets.bullet_id"
    )
    foreign = _integrity_error("FOREIGN KEY constraint failed")

    assert classify_integrity_error(unique) is InsertOutcome.CONFLICT
    assert classify_integrity_error(foreign) is InsertOutcome.INVALID_REFERENCE


def test_classify_unknown_error_is_other():
    error = _integrity_error("NOT NULL constraint failed: experience_bullets.bullet_id", pgcode="23502")

    assert classify_integrity_error(error) is InsertOutcome.OTHER
