from types import SimpleNamespace

import pytest

from diwaifox.core.exceptions import InvalidTokenError, PermissionDeniedError
from diwaifox.models import UserRole
from diwaifox.services.access_control import (
    Principal,
    can_accept_rides,
    can_submit_payment,
    can_update_ride_status,
    can_view_ride,
    payment_visible_in_list,
    require_admin,
    require_driver,
    ride_visible_in_list,
)

PASSENGER = Principal("p1", "p1@diwaifox.com", UserRole.PASSENGER)
OTHER_PASSENGER = Principal("p2", "p2@diwaifox.com", UserRole.PASSENGER)
DRIVER = Principal("d1", "d1@diwaifox.com", UserRole.DRIVER)
OTHER_DRIVER = Principal("d2", "d2@diwaifox.com", UserRole.DRIVER)
ADMIN = Principal("a1", "a1@diwaifox.com", UserRole.ADMIN)


def ride(status="pending", driver_id=None, passenger_id="p1"):
    return SimpleNamespace(passenger_id=passenger_id, driver_id=driver_id, status=status)


@pytest.mark.parametrize(
    "principal, item, visible",
    [
        (ADMIN, ride("completed", "d2", "p2"), True),
        (PASSENGER, ride(), True),
        (OTHER_PASSENGER, ride(), False),
        (DRIVER, ride("pending"), True),
        (DRIVER, ride("accepted", "d1"), True),
        (DRIVER, ride("accepted", "d2"), False),
        (DRIVER, ride("cancelled"), False),
    ],
)
def test_ride_list_visibility(principal, item, visible):
    assert ride_visible_in_list(principal, item) is visible


@pytest.mark.parametrize(
    "principal, item, allowed",
    [
        (ADMIN, ride(), True),
        (PASSENGER, ride(), True),
        (OTHER_PASSENGER, ride(), False),
        (DRIVER, ride("accepted", "d1"), True),
        # ожидающую поездку водитель видит в списке, но не по id
        (DRIVER, ride("pending"), False),
    ],
)
def test_view_ride(principal, item, allowed):
    assert can_view_ride(principal, item) is allowed


def test_only_drivers_accept():
    assert can_accept_rides(DRIVER)
    assert not can_accept_rides(PASSENGER)
    assert not can_accept_rides(ADMIN)


@pytest.mark.parametrize(
    "principal, allowed",
    [(ADMIN, True), (DRIVER, True), (OTHER_DRIVER, False), (PASSENGER, False)],
)
def test_update_status(principal, allowed):
    assert can_update_ride_status(principal, ride("accepted", "d1")) is allowed


@pytest.mark.parametrize(
    "principal, allowed",
    [(ADMIN, True), (PASSENGER, True), (OTHER_PASSENGER, False), (DRIVER, False)],
)
def test_submit_payment(principal, allowed):
    assert can_submit_payment(principal, ride("completed", "d1")) is allowed


def test_payment_visibility():
    payment = SimpleNamespace(passenger_id="p1")
    assert payment_visible_in_list(PASSENGER, payment)
    assert payment_visible_in_list(ADMIN, payment)
    assert not payment_visible_in_list(OTHER_PASSENGER, payment)


def test_unknown_role_is_a_bug():
    ghost = Principal("x", "x@diwaifox.com", "pilot")
    with pytest.raises(AssertionError):
        ride_visible_in_list(ghost, ride())


def test_require_helpers():
    require_admin(ADMIN)
    require_driver(DRIVER)
    with pytest.raises(PermissionDeniedError, match="Admin access required"):
        require_admin(DRIVER)
    with pytest.raises(PermissionDeniedError):
        require_driver(PASSENGER)


def test_principal_from_claims():
    claims = {"id": "d1", "email": "d1@diwaifox.com", "role": "driver"}
    assert Principal.from_claims(claims) == DRIVER
    with pytest.raises(InvalidTokenError):
        Principal.from_claims({"id": "1", "email": "a@diwaifox.com", "role": "root"})
