from __future__ import annotations

from pathlib import Path

import pytest

from tracker.domain.users.entities import User
from tracker.domain.users.exceptions import DuplicateEmailError
from tracker.infrastructure.db import build_engine, build_session_factory, init_db
from tracker.infrastructure.repositories.users.sqlalchemy_user_repository import \
    SqlAlchemyUserRepository
from tracker.shared.config import DatabaseConfig
from tracker.shared.errors import StoreUnavailableError


@pytest.fixture()
def repository(tmp_path: Path) -> SqlAlchemyUserRepository:
    engine = build_engine(DatabaseConfig(url=f"sqlite:///{tmp_path / 'users.db'}"))
    init_db(engine)
    yield SqlAlchemyUserRepository(build_session_factory(engine))
    engine.dispose()


def _user(email: str = "a@x.com", name: str = "Alice") -> User:
    return User(id=0, name=name, email=email, password_hash="hash")


def test_add_assigns_sequential_ids(repository: SqlAlchemyUserRepository) -> None:
    first = repository.add(_user("a@x.com"))
    second = repository.add(_user("b@x.com", name="Bob"))

    assert first.id == 1
    assert second.id == 2
    assert first.created_at is not None


def test_find_by_email_and_id(repository: SqlAlchemyUserRepository) -> None:
    created = repository.add(_user())

    by_email = repository.find_by_email("a@x.com")
    by_id = repository.find_by_id(created.id)

    assert by_email == by_id
    assert by_email is not None
    assert by_email.name == "Alice"
    assert by_email.password_hash == "hash"


def test_missing_user_is_none(repository: SqlAlchemyUserRepository) -> None:
    assert repository.find_by_email("nobody@x.com") is None
    assert repository.find_by_id(99) is None


def test_email_lookup_is_case_sensitive(repository: SqlAlchemyUserRepository) -> None:
    repository.add(_user("a@x.com"))

    assert repository.find_by_email("A@X.COM") is None


def test_unique_constraint_rejects_duplicate_email(repository: SqlAlchemyUserRepository) -> None:
    repository.add(_user())

    with pytest.raises(DuplicateEmailError):
        repository.add(_user(name="Impostor"))

    assert repository.find_by_email("a@x.com").name == "Alice"


def test_unreachable_store_raises_store_unavailable(tmp_path: Path) -> None:
    engine = build_engine(DatabaseConfig(url=f"sqlite:///{tmp_path / 'missing' / 'dir' / 'db.sqlite'}"))
    repository = SqlAlchemyUserRepository(build_session_factory(engine))

    with pytest.raises(StoreUnavailableError) as excinfo:
        repository.find_by_email("a@x.com")

    assert excinfo.value.code == "store_unavailable"
    assert excinfo.value.status == 503


def test_other_integrity_failures_are_not_duplicates(repository: SqlAlchemyUserRepository) -> None:
    with pytest.raises(StoreUnavailableError) as excinfo:
        repository.add(_user(name=None))  # type: ignore[arg-type]

    assert not isinstance(excinfo.value, DuplicateEmailError)
    assert repository.find_by_email("a@x.com") is None
