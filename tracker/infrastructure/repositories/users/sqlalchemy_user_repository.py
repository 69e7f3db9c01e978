# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from tracker.domain.users.entities import User as DomainUser
from tracker.domain.users.exceptions import DuplicateEmailError
from tracker.domain.users.repositories import UserRepository
from tracker.infrastructure.db.models import User
from tracker.infrastructure.unit_of_work import unit_of_work_scope
from tracker.shared.errors import StoreUnavailableError
from tracker.shared.logging import logger


def _is_duplicate_email(exc: IntegrityError) -> bool:
    # SQLite: "UNIQUE constraint failed: users.email"; PostgreSQL names the key and column.
    detail = str(exc.orig).lower()
    return ("unique" in detail or "duplicate" in detail) and "email" in detail


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> DomainUser | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.query(User).filter(User.email == email).first()
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            logger.error(f"users.find_by_email: store failure ({type(exc).__name__})")
            raise StoreUnavailableError("find_by_email") from exc

    def find_by_id(self, user_id: int) -> DomainUser | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.get(User, user_id)
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            logger.error(f"users.find_by_id: store failure ({type(exc).__name__})")
            raise StoreUnavailableError("find_by_id") from exc

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(name=user.name, email=user.email, password_hash=user.password_hash)
                if user.created_at is not None:
                    row.created_at = user.created_at
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            if not _is_duplicate_email(exc):
                logger.error(f"users.add: integrity failure ({exc.orig})")
                raise StoreUnavailableError("add") from exc
            logger.warning("users.add: unique constraint rejected duplicate email")
            raise DuplicateEmailError() from exc
        except SQLAlchemyError as exc:
            logger.error(f"users.add: store failure ({type(exc).__name__})")
            raise StoreUnavailableError("add") from exc
