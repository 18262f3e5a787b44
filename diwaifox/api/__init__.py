from fastapi import APIRouter

from diwaifox.schemas.base import ErrorResponse

from . import admin, auth, drivers, payments, rides, users

# Обработчики объявлены через def: bcrypt и сессии SQLAlchemy блокируют,
# FastAPI выполняет такие обработчики в пуле потоков, а не в event loop.
# Общий формат ошибок для документации OpenAPI
api_router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    }
)
api_router.include_router(auth.router)
api_router.include_router(rides.router)
api_router.include_router(payments.router)
api_router.include_router(users.router)
api_router.include_router(drivers.router)
api_router.include_router(admin.router)
