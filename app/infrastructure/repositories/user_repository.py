"""Persistence layer for portal identities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import or_, true
from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.models import UserModel


class UserRepository:
    """Provide lookups over the identity directory."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_login(self, login: str) -> User | None:
        """Return the user whose username or e-mail matches ``login``."""

        normalized = login.strip()
        model = (
            self.session.query(UserModel)
            .filter(
                or_(
                    UserModel.username == normalized,
                    UserModel.email == normalized.lower(),
                )
            )
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel(
            username=user.username,
            email=user.email.lower(),
            password=user.password,
            role=user.role,
            is_active=user.is_active,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def record_login(self, user_id: int, *, when: datetime) -> None:
        self.session.query(UserModel).filter(UserModel.id == user_id).update(
            {UserModel.last_login: when}, synchronize_session=False
        )
        self.session.commit()

    def list_active_ids(self) -> set[int]:
        """Return the identifiers of every active identity in one query."""

        query = self.session.query(UserModel.id).filter(UserModel.is_active == true())
        return {user_id for (user_id,) in query.all()}

    def get_map_by_ids(self, user_ids: Sequence[int]) -> dict[int, User]:
        if not user_ids:
            return {}

        unique_ids = {int(user_id) for user_id in user_ids}
        query = self.session.query(UserModel).filter(UserModel.id.in_(unique_ids))
        return {model.id: self._to_entity(model) for model in query.all()}

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            password=model.password,
            role=model.role,
            is_active=model.is_active,
            last_login=model.last_login,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


__all__ = ["UserRepository"]
