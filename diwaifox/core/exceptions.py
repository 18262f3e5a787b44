"""Доменные исключения сервиса и их HTTP-статусы."""


class ServiceError(Exception):
    """Базовое исключение бизнес-логики."""
    status_code = 500

    def __init__(self, message: str = "Server error"):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Отсутствуют или некорректны входные данные."""
    status_code = 400


class ConflictError(ServiceError):
    """Операция конфликтует с текущим состоянием (email занят, поездка уже принята)."""
    status_code = 400


class AuthenticationError(ServiceError):
    """Неверные учетные данные или отсутствует токен."""
    status_code = 401


class InvalidTokenError(ServiceError):
    """Токен не прошел проверку подписи или формата."""
    status_code = 403


class PermissionDeniedError(ServiceError):
    """Роль или владелец не совпадают с требуемыми."""
    status_code = 403


class NotFoundError(ServiceError):
    """Запись с указанным идентификатором не найдена."""
    status_code = 404
