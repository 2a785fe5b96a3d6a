from fastapi import APIRouter
from charityconnect.api.endpoints import donations, payments, needy, analytics, admin

api_router = APIRouter()

api_router.include_router(payments.router, tags=["payments"])
api_router.include_router(donations.router, prefix="/donations", tags=["donations"])
api_router.include_router(needy.router, prefix="/needy", tags=["needy"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
api_router.include_router(admin.router, tags=["admin"])
