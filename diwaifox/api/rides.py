# api/rides.py
from fastapi import APIRouter, Depends, status

from diwaifox.schemas.ride import (
    RideChangedResponse,
    RideCreate,
    RideEnvelope,
    RideListResponse,
    RideResponse,
    RideStatusUpdate,
)
from diwaifox.services import Principal, ServiceContainer

from .dependencies import get_current_principal, get_services, ride_with_participants

router = APIRouter(prefix="/rides", tags=["rides"])


@router.post("", response_model=RideChangedResponse, status_code=status.HTTP_201_CREATED)
def create_ride(
    ride_data: RideCreate,
    services: ServiceContainer = Depends(get_services),
    current_user: Principal = Depends(get_current_principal),
):
    """Создание нового заказа такси"""
    ride = services.rides.book(
        current_user,
        pickup_location=ride_data.pickup_location,
        destination=ride_data.destination,
        vehicle_type=ride_data.vehicle_type,
        payment_method=ride_data.payment_method,
    )
    return RideChangedResponse(message="Ride booked successfully", ride=RideResponse.model_validate(ride))


@router.get("", response_model=RideListResponse)
def list_rides(
    services: ServiceContainer = Depends(get_services),
    current_user: Principal = Depends(get_current_principal),
):
    """Список поездок с учетом роли: админ видит все, водитель свои и ожидающие"""
    rides = services.rides.list_for(current_user)
    return RideListResponse(rides=[ride_with_participants(services, ride) for ride in rides])


@router.get("/{ride_id}", response_model=RideEnvelope)
def get_ride(
    ride_id: str,
    services: ServiceContainer = Depends(get_services),
    current_user: Principal = Depends(get_current_principal),
):
    ride = services.rides.get_for(current_user, ride_id)
    return RideEnvelope(ride=RideResponse.model_validate(ride))


@router.put("/{ride_id}/accept", response_model=RideChangedResponse)
def accept_ride(
    ride_id: str,
    services: ServiceContainer = Depends(get_services),
    current_user: Principal = Depends(get_current_principal),
):
    """Водитель принимает заказ"""
    ride = services.rides.accept(current_user, ride_id)
    return RideChangedResponse(message="Ride accepted", ride=RideResponse.model_validate(ride))


@router.put("/{ride_id}/status", response_model=RideChangedResponse)
def update_ride_status(
    ride_id: str,
    status_update: RideStatusUpdate,
    services: ServiceContainer = Depends(get_services),
    current_user: Principal = Depends(get_current_principal),
):
    """Обновление статуса поездки назначенным водителем или админом"""
    ride = services.rides.update_status(current_user, ride_id, status_update.status)
    return RideChangedResponse(message="Ride status updated", ride=RideResponse.model_validate(ride))
