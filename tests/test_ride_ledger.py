import random
import threading
from datetime import datetime, timezone

import pytest

from diwaifox.core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from diwaifox.models import UserRole
from diwaifox.repositories import build_memory_repositories
from diwaifox.services import (
    FareEstimator,
    FixedDistanceEstimator,
    Principal,
    RandomDistanceEstimator,
    RideLedger,
    build_services,
)

from .conftest import UserFactory, make_settings


def book(services, passenger, vehicle_type="suv", **extra):
    return services.rides.book(passenger, "Boroko", "Jacksons Airport", vehicle_type, **extra)


def test_book_ride(services, make_user):
    passenger = make_user()

    ride = book(services, passenger)

    assert ride.status == "pending"
    assert ride.driver_id is None
    assert ride.passenger_id == passenger.id
    assert ride.distance == 10.0
    assert ride.fare == 35.0
    assert 5 <= ride.eta <= 20
    assert ride.payment_method == "cash"
    assert ride.payment_status == "pending"
    assert ride.start_time is None and ride.end_time is None


def test_book_keeps_payment_method(services, make_user):
    ride = book(services, make_user(), payment_method="card")
    assert ride.payment_method == "card"


def test_book_rounds_distance(app_settings, memory_repositories):
    services = build_services(
        app_settings, memory_repositories, distance_estimator=FixedDistanceEstimator(3.14159)
    )
    passenger = UserFactory(services)()

    ride = book(services, passenger, "sedan")

    assert ride.distance == 3.14
    assert ride.fare == 11.28


@pytest.mark.parametrize("field", ["pickup_location", "destination", "vehicle_type"])
def test_book_requires_fields(services, make_user, field):
    fields = dict(pickup_location="A", destination="B", vehicle_type="sedan")
    fields[field] = ""

    with pytest.raises(ValidationError, match="Missing required fields"):
        services.rides.book(make_user(), **fields)


def test_accept_ride(services, make_user):
    ride = book(services, make_user())
    driver = make_user(UserRole.DRIVER)

    accepted = services.rides.accept(driver, ride.id)

    assert accepted.status == "accepted"
    assert accepted.driver_id == driver.id
    assert accepted.start_time is not None
    assert accepted.start_time.tzinfo is not None
    assert services.rides.get(ride.id).driver_id == driver.id


def test_second_accept_conflicts(services, make_user):
    ride = book(services, make_user())
    first = make_user(UserRole.DRIVER)
    second = make_user(UserRole.DRIVER)
    services.rides.accept(first, ride.id)

    with pytest.raises(ConflictError, match="Ride is not available"):
        services.rides.accept(second, ride.id)

    assert services.rides.get(ride.id).driver_id == first.id


def test_accept_lost_race_conflicts(services, make_user, monkeypatch):
    ride = book(services, make_user())
    driver = make_user(UserRole.DRIVER)
    # между чтением и записью поездку успел изменить кто-то другой
    monkeypatch.setattr(services.repositories.rides, "compare_and_set", lambda *a, **kw: None)

    with pytest.raises(ConflictError):
        services.rides.accept(driver, ride.id)


def test_accept_requires_driver(services, make_user):
    ride = book(services, make_user())

    with pytest.raises(PermissionDeniedError, match="Only drivers can accept rides"):
        services.rides.accept(make_user(UserRole.ADMIN), ride.id)
    with pytest.raises(PermissionDeniedError):
        services.rides.accept(make_user(), ride.id)


def test_accept_unknown_ride(services, make_user):
    with pytest.raises(NotFoundError, match="Ride not found"):
        services.rides.accept(make_user(UserRole.DRIVER), "missing")


def test_concurrent_accepts_have_one_winner(app_settings):
    services = build_services(
        app_settings, build_memory_repositories(), distance_estimator=FixedDistanceEstimator(5.0)
    )
    users = UserFactory(services)
    ride = book(services, users())
    drivers = [users(UserRole.DRIVER) for _ in range(8)]
    barrier = threading.Barrier(len(drivers))
    winners, losers = [], []

    def attempt(driver):
        barrier.wait()
        try:
            services.rides.accept(driver, ride.id)
            winners.append(driver.id)
        except ConflictError:
            losers.append(driver.id)

    threads = [threading.Thread(target=attempt, args=(d,)) for d in drivers]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(winners) == 1
    assert len(losers) == len(drivers) - 1
    assert services.rides.get(ride.id).driver_id == winners[0]


def test_list_for_roles(services, make_user):
    passenger = make_user()
    other_passenger = make_user()
    driver = make_user(UserRole.DRIVER)
    other_driver = make_user(UserRole.DRIVER)
    admin = make_user(UserRole.ADMIN)

    pending = book(services, passenger)
    mine = book(services, passenger)
    theirs = book(services, other_passenger)
    services.rides.accept(driver, mine.id)
    services.rides.accept(other_driver, theirs.id)

    def ids(principal):
        return {r.id for r in services.rides.list_for(principal)}

    assert ids(admin) == {pending.id, mine.id, theirs.id}
    assert ids(passenger) == {pending.id, mine.id}
    assert ids(other_passenger) == {theirs.id}
    assert ids(driver) == {pending.id, mine.id}
    assert ids(other_driver) == {pending.id, theirs.id}


def test_get_for_checks_participants(services, make_user):
    passenger = make_user()
    ride = book(services, passenger)
    driver = make_user(UserRole.DRIVER)

    assert services.rides.get_for(passenger, ride.id).id == ride.id
    with pytest.raises(PermissionDeniedError, match="Access denied"):
        services.rides.get_for(make_user(), ride.id)
    with pytest.raises(PermissionDeniedError):
        services.rides.get_for(driver, ride.id)

    services.rides.accept(driver, ride.id)
    assert services.rides.get_for(driver, ride.id).id == ride.id
    assert services.rides.get_for(make_user(UserRole.ADMIN), ride.id).id == ride.id


def test_participants(services, make_user):
    passenger = make_user()
    driver = make_user(UserRole.DRIVER)
    ride = book(services, passenger)

    rider, nobody = services.rides.participants(ride)
    assert rider.id == passenger.id
    assert nobody is None

    accepted = services.rides.accept(driver, ride.id)
    _, assigned = services.rides.participants(accepted)
    assert assigned.id == driver.id


def test_complete_credits_driver_once(services, make_user):
    passenger = make_user()
    driver = make_user(UserRole.DRIVER)
    bystander = make_user(UserRole.DRIVER)
    ride = book(services, passenger)
    services.rides.accept(driver, ride.id)

    services.rides.update_status(driver, ride.id, "in-progress")
    completed = services.rides.update_status(driver, ride.id, "completed")
    services.rides.update_status(driver, ride.id, "completed")

    assert completed.status == "completed"
    assert completed.end_time is not None
    assert services.credentials.get_user(driver.id).earnings == pytest.approx(ride.fare)
    assert services.credentials.get_user(bystander.id).earnings == 0.0


def test_reopened_ride_is_not_paid_twice(services, make_user):
    driver = make_user(UserRole.DRIVER)
    ride = book(services, make_user())
    services.rides.accept(driver, ride.id)

    services.rides.update_status(driver, ride.id, "completed")
    services.rides.update_status(driver, ride.id, "cancelled")
    again = services.rides.update_status(driver, ride.id, "completed")

    assert again.status == "completed"
    assert again.earnings_credited is True
    assert services.credentials.get_user(driver.id).earnings == pytest.approx(ride.fare)


def test_driver_assigned_after_admin_completion_is_paid(services, make_user):
    admin = make_user(UserRole.ADMIN)
    driver = make_user(UserRole.DRIVER)
    ride = book(services, make_user())
    services.rides.update_status(admin, ride.id, "completed")
    services.rides.update_status(admin, ride.id, "pending")

    services.rides.accept(driver, ride.id)
    services.rides.update_status(driver, ride.id, "completed")

    assert services.credentials.get_user(driver.id).earnings == pytest.approx(ride.fare)


def test_earnings_accumulate_across_rides(services, make_user):
    passenger = make_user()
    driver = make_user(UserRole.DRIVER)
    fares = []
    for vehicle_type in ("sedan", "suv"):
        ride = book(services, passenger, vehicle_type)
        services.rides.accept(driver, ride.id)
        services.rides.update_status(driver, ride.id, "completed")
        fares.append(ride.fare)

    assert services.credentials.get_user(driver.id).earnings == pytest.approx(sum(fares))


def test_admin_completes_unassigned_ride_without_credit(services, make_user):
    ride = book(services, make_user())
    admin = make_user(UserRole.ADMIN)

    completed = services.rides.update_status(admin, ride.id, "completed")

    assert completed.status == "completed"
    assert completed.driver_id is None


def test_update_status_permissions(services, make_user):
    passenger = make_user()
    driver = make_user(UserRole.DRIVER)
    ride = book(services, passenger)
    services.rides.accept(driver, ride.id)

    with pytest.raises(PermissionDeniedError):
        services.rides.update_status(passenger, ride.id, "cancelled")
    with pytest.raises(PermissionDeniedError):
        services.rides.update_status(make_user(UserRole.DRIVER), ride.id, "cancelled")

    cancelled = services.rides.update_status(make_user(UserRole.ADMIN), ride.id, "cancelled")
    assert cancelled.status == "cancelled"


def test_update_status_validation(services, make_user):
    driver = make_user(UserRole.DRIVER)
    ride = book(services, make_user())
    services.rides.accept(driver, ride.id)

    with pytest.raises(ValidationError, match="Invalid status"):
        services.rides.update_status(driver, ride.id, "teleported")
    with pytest.raises(NotFoundError):
        services.rides.update_status(driver, "missing", "completed")


def test_update_status_does_not_enforce_transitions(services, make_user):
    driver = make_user(UserRole.DRIVER)
    ride = book(services, make_user())
    services.rides.accept(driver, ride.id)
    services.rides.update_status(driver, ride.id, "completed")

    reopened = services.rides.update_status(driver, ride.id, "pending")

    assert reopened.status == "pending"


def test_every_change_bumps_version(services, make_user):
    driver = make_user(UserRole.DRIVER)
    ride = book(services, make_user())
    assert ride.version == 1

    accepted = services.rides.accept(driver, ride.id)
    assert accepted.version == 2
    started = services.rides.update_status(driver, ride.id, "in-progress")
    assert started.version == 3


def test_created_at_comes_from_clock(memory_repositories):
    fixed = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    ledger = RideLedger(
        memory_repositories.rides,
        memory_repositories.users,
        FareEstimator(rng=random.Random(0)),
        RandomDistanceEstimator(rng=random.Random(0)),
        clock=lambda: fixed,
    )
    passenger = Principal("p1", "p1@diwaifox.com", UserRole.PASSENGER)

    ride = ledger.book(passenger, "Gerehu", "Koki", "van")

    assert ride.created_at == fixed
    assert 2.0 <= ride.distance < 22.0
    assert 8.0 <= ride.fare < 38.0


def test_settings_rates_drive_fares(memory_repositories):
    settings = make_settings(BASE_FARE=1.0, PER_KM_RATES={"suv": 10.0})
    services = build_services(settings, memory_repositories, distance_estimator=FixedDistanceEstimator(2.0))

    assert book(services, UserFactory(services)()).fare == 21.0
