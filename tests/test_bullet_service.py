"""
Unit tests for the bullet store.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobhunt.db.base import Base
from jobhunt.db.models import User
from jobhunt.core.errors import NotFoundError, ValidationError
from jobhunt.services import bullet_service


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
def user_id(db):
    user = User(email="bullets@example.com", password_hash="not-a-real-hash")
    db.add(user)
    db.commit()
    return user.id


@pytest.fixture
def other_user_id(db):
    user = User(email="someone@example.com", password_hash="not-a-real-hash")
    db.add(user)
    db.commit()
    return user.id


def test_create_bullet_strips_text(db, user_id):
    bullet = bullet_service.create_bullet(db, user_id, "  Cut build times by 40%  ")

    assert bullet.id is not None
    assert bullet.user_id == user_id
    assert bullet.text == "Cut build times by 40%"
    assert bullet.created_at is not None
    assert bullet.updated_at is not None


@pytest.mark.parametrize("text", ["", "   ", "x" * 501])
def test_create_bullet_rejects_bad_text(db, user_id, text):
    with pytest.raises(ValidationError):
        bullet_service.create_bullet(db, user_id, text)

    assert bullet_service.count_bullets(db, user_id) == 0


def test_create_bullet_accepts_max_length(db, user_id):
    bullet = bullet_service.create_bullet(db, user_id, "x" * 500)

    assert len(bullet.text) == 500


def test_list_bullets_most_recently_updated_first(db, user_id):
    first = bullet_service.create_bullet(db, user_id, "First")
    second = bullet_service.create_bullet(db, user_id, "Second")
    third = bullet_service.create_bullet(db, user_id, "Third")

    assert [b.id for b in bullet_service.list_bullets(db, user_id)] == [third.id, second.id, first.id]

    # Editing the oldest bullet moves it to the top
    bullet_service.update_bullet(db, first.id, user_id, "First, revised")

    assert [b.id for b in bullet_service.list_bullets(db, user_id)] == [first.id, third.id, second.id]


def test_list_bullets_paging(db, user_id):
    for i in range(5):
        bullet_service.create_bullet(db, user_id, f"Bullet {i}")

    page = bullet_service.list_bullets(db, user_id, limit=2, offset=1)

    assert [b.text for b in page] == ["Bullet 3", "Bullet 2"]
    assert bullet_service.count_bullets(db, user_id) == 5


def test_list_bullets_rejects_bad_paging(db, user_id):
    with pytest.raises(ValidationError):
        bullet_service.list_bullets(db, user_id, limit=0)
    with pytest.raises(ValidationError):
        bullet_service.list_bullets(db, user_id, offset=-1)


def test_bullets_scoped_to_owner(db, user_id, other_user_id):
    mine = bullet_service.create_bullet(db, user_id, "Mine")
    bullet_service.create_bullet(db, other_user_id, "Theirs")

    assert [b.id for b in bullet_service.list_bullets(db, user_id)] == [mine.id]
    with pytest.raises(NotFoundError):
        bullet_service.get_bullet(db, mine.id, other_user_id)
    with pytest.raises(NotFoundError):
        bullet_service.update_bullet(db, mine.id, other_user_id, "Hijacked")
    with pytest.raises(NotFoundError):
        bullet_service.delete_bullet(db, mine.id, other_user_id)

    assert bullet_service.get_bullet(db, mine.id, user_id).text == "Mine"


def test_get_missing_bullet(db, user_id):
    with pytest.raises(NotFoundError):
        bullet_service.get_bullet(db, 404, user_id)


def test_update_bullet(db, user_id):
    bullet = bullet_service.create_bullet(db, user_id, "Draft")

    updated = bullet_service.update_bullet(db, bullet.id, user_id, "Final")

    assert updated.id == bullet.id
    assert updated.text == "Final"


def test_update_bullet_rejects_blank(db, user_id):
    bullet = bullet_service.create_bullet(db, user_id, "Draft")

    with pytest.raises(ValidationError):
        bullet_service.update_bullet(db, bullet.id, user_id, "   ")

    assert bullet_service.get_bullet(db, bullet.id, user_id).text == "Draft"


def test_delete_bullet_without_associations(db, user_id):
    bullet = bullet_service.create_bullet(db, user_id, "Temporary")

    assert bullet_service.delete_bullet(db, bullet.id, user_id) == 0
    with pytest.raises(NotFoundError):
        bullet_service.get_bullet(db, bullet.id, user_id)


def test_search_bullets_case_insensitive(db, user_id, other_user_id):
    bullet_service.create_bullet(db, user_id, "Built a Python ETL pipeline")
    bullet_service.create_bullet(db, user_id, "Mentored two engineers")
    bullet_service.create_bullet(db, other_user_id, "Python everywhere")

    results = bullet_service.search_bullets(db, user_id, "python")

    assert [b.text for b in results] == ["Built a Python ETL pipeline"]


def test_search_bullets_treats_wildcards_literally(db, user_id):
    bullet_service.create_bullet(db, user_id, "Grew revenue 20%")
    bullet_service.create_bullet(db, user_id, "Grew revenue by a lot")

    results = bullet_service.search_bullets(db, user_id, "20%")

    assert [b.text for b in results] == ["Grew revenue 20%"]
    assert bullet_service.search_bullets(db, user_id, "_") == []


def test_search_bullets_paging(db, user_id):
    for i in range(4):
        bullet_service.create_bullet(db, user_id, f"Shipped feature {i}")

    results = bullet_service.search_bullets(db, user_id, "shipped", limit=2, offset=2)

    assert [b.text for b in results] == ["Shipped feature 1", "Shipped feature 0"]


def test_search_bullets_rejects_empty_term(db, user_id):
    with pytest.raises(ValidationError):
        bullet_service.search_bullets(db, user_id, "")
