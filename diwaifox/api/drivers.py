# api/drivers.py
from fastapi import APIRouter, Depends

from diwaifox.schemas.user import DriverStatusResponse, DriverStatusUpdate, UserResponse
from diwaifox.services import Principal, ServiceContainer

from .dependencies import get_current_principal, get_services

router = APIRouter(prefix="/drivers", tags=["drivers"])


@router.put("/status", response_model=DriverStatusResponse)
def update_driver_status(
    status_update: DriverStatusUpdate,
    services: ServiceContainer = Depends(get_services),
    current_user: Principal = Depends(get_current_principal),
):
    """Обновление статуса водителя (online/offline)"""
    driver = services.credentials.set_driver_status(current_user, status_update.status)
    return DriverStatusResponse(message="Status updated", driver=UserResponse.model_validate(driver))
