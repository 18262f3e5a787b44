"""Хэширование паролей и выпуск JWT-токенов."""

from typing import Any, Dict

from jose import JWTError, jwt
from passlib.context import CryptContext

from .exceptions import InvalidTokenError


class TokenCodec:
    """
    Подписывает и проверяет bearer-токены.
    Токен содержит {id, email, role} и не имеет срока действия.
    """

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def encode(self, claims: Dict[str, Any]) -> str:
        return jwt.encode(dict(claims), self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidTokenError("Invalid token") from e


class PasswordHasher:
    """Обертка над passlib CryptContext (bcrypt)."""

    def __init__(self, rounds: int = 10):
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        return self._context.verify(password, hashed)

    def dummy_verify(self) -> None:
        """Тратит столько же времени, сколько настоящая проверка."""
        self._context.dummy_verify()
