"""
Пользователи, пароли и токены.

Хэширование паролей делегировано passlib (bcrypt), подпись токенов python-jose.
"""

import logging
import uuid
from typing import Callable, List, Optional, Tuple

from diwaifox.core.clock import utcnow
from diwaifox.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from diwaifox.core.security import PasswordHasher, TokenCodec
from diwaifox.models import DriverStatus, User, UserRole, UserStatus
from diwaifox.repositories import UserRepository

from .access_control import Principal, require_admin, require_driver

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class CredentialStore:

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenCodec,
        clock: Callable = utcnow,
    ):
        self._users = users
        self._hasher = hasher
        self._tokens = tokens
        self._clock = clock

    def register(
        self,
        email: str,
        password: str,
        name: str,
        phone: str,
        role,
        vehicle_type: Optional[str] = None,
        license_plate: Optional[str] = None,
    ) -> Tuple[User, str]:
        """
        Регистрация пассажира, водителя или администратора.

        Returns:
            Созданного пользователя и подписанный токен.

        Raises:
            ValidationError: не заполнено обязательное поле или неизвестная роль.
            ConflictError: email уже зарегистрирован.
        """
        if not all([email, password, name, phone, role]):
            raise ValidationError("All fields are required")
        try:
            role = UserRole(role)
        except ValueError:
            raise ValidationError(f"Unknown role: {role}")

        if self._users.get_by_email(email) is not None:
            raise ConflictError("User already exists")

        is_driver = role is UserRole.DRIVER
        user = User(
            id=str(uuid.uuid4()),
            email=email,
            password_hash=self._hasher.hash(password),
            name=name,
            phone=phone,
            role=role.value,
            vehicle_type=vehicle_type if is_driver else None,
            license_plate=license_plate if is_driver else None,
            status=(UserStatus.OFFLINE if is_driver else UserStatus.ACTIVE).value,
            earnings=0.0,
            rating=5.0,
            created_at=self._clock(),
        )
        # уникальность email окончательно проверяет репозиторий
        self._users.add(user)
        logger.info(f"Зарегистрирован пользователь {user.id} с ролью {user.role}")
        return user, self.issue_token(user)

    def login(self, email: str, password: str) -> Tuple[User, str]:
        user = self._users.get_by_email(email)
        if user is None:
            # одинаковый ответ и время для неизвестного email и неверного пароля
            self._hasher.dummy_verify()
            logger.info("Неудачная попытка входа")
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not self._hasher.verify(password, user.password_hash):
            logger.info(f"Неудачная попытка входа для пользователя {user.id}")
            raise AuthenticationError(INVALID_CREDENTIALS)
        return user, self.issue_token(user)

    def issue_token(self, user: User) -> str:
        return self._tokens.encode({"id": user.id, "email": user.email, "role": user.role})

    def verify_token(self, token: Optional[str]) -> Principal:
        """Декодирует токен. Срок действия не проверяется: токены бессрочные."""
        if not token:
            raise AuthenticationError("Access denied")
        return Principal.from_claims(self._tokens.decode(token))

    def request_password_reset(self, email: str) -> str:
        # письмо не отправляется, это заглушка
        user = self._users.get_by_email(email)
        if user is None:
            raise NotFoundError("User not found")
        logger.info(f"Запрошен сброс пароля для пользователя {user.id}")
        return "Password reset email sent"

    def get_user(self, user_id: str) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def list_users(self, principal: Principal) -> List[User]:
        require_admin(principal)
        return self._users.list()

    def update_profile(
        self,
        principal: Principal,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        vehicle_type: Optional[str] = None,
        license_plate: Optional[str] = None,
    ) -> User:
        """Пустые значения игнорируются, поля машины меняются только у водителя."""
        user = self.get_user(principal.id)
        fields = {}
        if name:
            fields["name"] = name
        if phone:
            fields["phone"] = phone
        if user.role == UserRole.DRIVER:
            if vehicle_type:
                fields["vehicle_type"] = vehicle_type
            if license_plate:
                fields["license_plate"] = license_plate
        if not fields:
            return user
        return self._users.update(user.id, **fields)

    def set_driver_status(self, principal: Principal, status) -> User:
        require_driver(principal)
        try:
            status = DriverStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown driver status: {status}")
        user = self._users.update(principal.id, status=status.value)
        if user is None:
            raise NotFoundError("User not found")
        logger.info(f"Водитель {user.id} перешел в статус {status.value}")
        return user

    def seed_admin(self, email: str, password: str, name: str, phone: str) -> Optional[User]:
        """Создает администратора по умолчанию, если его еще нет."""
        if self._users.get_by_email(email) is not None:
            return None
        try:
            user, _ = self.register(email, password, name, phone, UserRole.ADMIN)
        except ConflictError:
            return None
        logger.warning(f"Создан администратор по умолчанию: {email}")
        return user
