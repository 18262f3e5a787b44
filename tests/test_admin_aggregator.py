import random
from datetime import timedelta

import pytest

from diwaifox.core.clock import utcnow
from diwaifox.core.exceptions import PermissionDeniedError
from diwaifox.models import UserRole
from diwaifox.services import (
    AdminAggregator,
    FareEstimator,
    FixedDistanceEstimator,
    RideLedger,
)


def test_stats(services, make_user):
    admin = make_user(UserRole.ADMIN)
    passenger = make_user()
    make_user()
    driver = make_user(UserRole.DRIVER)
    make_user(UserRole.DRIVER)
    services.credentials.set_driver_status(driver, "online")

    done = services.rides.book(passenger, "A", "B", "sedan")
    riding = services.rides.book(passenger, "A", "C", "suv")
    services.rides.book(passenger, "A", "D", "van")
    services.rides.accept(driver, done.id)
    services.rides.update_status(driver, done.id, "completed")
    services.rides.accept(driver, riding.id)
    services.rides.update_status(driver, riding.id, "in-progress")
    services.payments.submit(passenger, done.id, 25.0)
    services.payments.submit(passenger, done.id, 25.0)

    stats = services.admin.stats(admin)

    assert stats.total_rides == 3
    assert stats.completed_rides == 1
    assert stats.active_rides == 1
    assert stats.total_revenue == pytest.approx(50.0)
    assert stats.total_drivers == 2
    assert stats.online_drivers == 1
    assert stats.total_passengers == 2
    assert stats.today_rides == 3


def test_stats_empty_platform(services, make_user):
    stats = services.admin.stats(make_user(UserRole.ADMIN))

    assert stats.total_rides == 0
    assert stats.total_revenue == 0
    assert stats.total_passengers == 0


@pytest.mark.parametrize("role", [UserRole.PASSENGER, UserRole.DRIVER])
def test_stats_admin_only(services, make_user, role):
    with pytest.raises(PermissionDeniedError, match="Admin access required"):
        services.admin.stats(make_user(role))


def test_today_rides_skips_older_rides(services, make_user):
    repos = services.repositories
    passenger = make_user()
    yesterday_ledger = RideLedger(
        repos.rides,
        repos.users,
        FareEstimator(rng=random.Random(0)),
        FixedDistanceEstimator(4.0),
        clock=lambda: utcnow() - timedelta(days=2),
    )
    yesterday_ledger.book(passenger, "A", "B", "sedan")
    services.rides.book(passenger, "A", "B", "sedan")

    stats = AdminAggregator(repos.users, repos.rides, repos.payments).stats(make_user(UserRole.ADMIN))

    assert stats.total_rides == 2
    assert stats.today_rides == 1


def test_platform_settings_defaults_and_update(services, make_user):
    admin = make_user(UserRole.ADMIN)

    current = services.platform_settings.get(admin)
    assert current.email_notifications is True
    assert current.theme == "gold"

    services.platform_settings.update(admin, email_notifications=False)
    updated = services.platform_settings.update(admin, theme="dark")

    assert updated.email_notifications is False
    assert updated.theme == "dark"
    assert services.platform_settings.get(admin).theme == "dark"


def test_platform_settings_admin_only(services, make_user):
    passenger = make_user()

    with pytest.raises(PermissionDeniedError):
        services.platform_settings.get(passenger)
    with pytest.raises(PermissionDeniedError):
        services.platform_settings.update(passenger, theme="dark")
