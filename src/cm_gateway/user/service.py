"""User service: login, register, lookup.

All DB operations use the injected AsyncSession. Writes commit inside
the service; reads leave the session untouched.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.cm_common.enums import Role
from src.cm_common.errors import InvalidCredentialsError, RegistrationFailedError
from src.cm_gateway.auth.password import hash_password, verify_password
from src.cm_gateway.auth.principal import SessionPrincipal
from src.cm_gateway.user.db_models import UserModel

logger = logging.getLogger("cm.security")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def to_principal(user: UserModel) -> SessionPrincipal:
    return SessionPrincipal(
        user_id=str(user.id),
        email=user.email,
        role=Role(user.role),
        name=user.name,
    )


class UserService:
    """Stateless service: instantiate once, reuse across requests."""

    async def login(self, email: str, password: str, db: AsyncSession) -> UserModel:
        """Authenticate by email + password.

        Unknown email and wrong password both raise InvalidCredentialsError
        so the response never reveals which accounts exist.
        """
        result = await db.execute(
            select(UserModel).where(UserModel.email == normalize_email(email))
        )
        user = result.scalar_one_or_none()

        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()
        return user

    async def register(
        self,
        email: str,
        password: str,
        name: str,
        role: str,
        db: AsyncSession,
    ) -> UserModel:
        email = normalize_email(email)
        result = await db.execute(select(UserModel).where(UserModel.email == email))
        if result.scalar_one_or_none() is not None:
            raise RegistrationFailedError()

        user = UserModel(
            email=email,
            name=name.strip(),
            role=role,
            password_hash=hash_password(password),
        )
        db.add(user)
        try:
            await db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            await db.rollback()
            logger.info("registration conflict on commit")
            raise RegistrationFailedError() from None
        return user

    async def get_user(self, db: AsyncSession, user_id: str) -> UserModel | None:
        result = await db.execute(select(UserModel).where(UserModel.id == user_id))
        return result.scalar_one_or_none()
