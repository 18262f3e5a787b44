"""Глобальные настройки платформы, доступны только администратору."""

import logging
from typing import Optional

from diwaifox.models import PlatformSettings
from diwaifox.repositories import SettingsRepository

from .access_control import Principal, require_admin

logger = logging.getLogger(__name__)


class PlatformSettingsService:

    def __init__(self, repository: SettingsRepository):
        self._repository = repository

    def get(self, principal: Principal) -> PlatformSettings:
        require_admin(principal)
        return self._repository.get()

    def update(
        self,
        principal: Principal,
        email_notifications: Optional[bool] = None,
        theme: Optional[str] = None,
    ) -> PlatformSettings:
        require_admin(principal)
        fields = {}
        if email_notifications is not None:
            fields["email_notifications"] = email_notifications
        if theme:
            fields["theme"] = theme
        if not fields:
            return self._repository.get()
        logger.info(f"Администратор {principal.id} изменил настройки: {fields}")
        return self._repository.update(**fields)
