from fastapi import APIRouter
from quickcourt.api.v1.routes.auth import router as auth_router
from quickcourt.api.v1.routes.slots import router as slots_router
from quickcourt.api.v1.routes.courts import router as courts_router
from quickcourt.api.v1.routes.bookings import router as bookings_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth_router)
api_router.include_router(slots_router)
api_router.include_router(courts_router)
api_router.include_router(bookings_router)
