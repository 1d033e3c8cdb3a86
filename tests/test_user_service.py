import pytest

from campusmart.domain.errors import NotFoundError
from campusmart.domain.schemas import UserCreate
from campusmart.services.user_service import UserService


@pytest.fixture
def users(db_session):
    return UserService(db_session)


def test_create_and_get(users):
    created = users.create_user(UserCreate(username="erin", first_name="Erin", last_name="Lee"))

    assert users.get_user(created.id) == created
    assert users.exists(created.id) is True


def test_display_name(users, market):
    assert users.display_name(market.bob) == "Bob Seller"
    # bez imienia i nazwiska: username
    assert users.display_name(market.carol) == "carol"


def test_unknown_user(users, db_session):
    assert users.exists(404) is False
    with pytest.raises(NotFoundError):
        users.get_user(404)
    with pytest.raises(NotFoundError):
        users.display_name(404)
