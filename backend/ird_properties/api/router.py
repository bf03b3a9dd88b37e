from fastapi import APIRouter
from ird_properties.api.endpoints import auth, users, properties, requests, issuances, dashboard

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(properties.router)
api_router.include_router(requests.router)
api_router.include_router(issuances.router)
api_router.include_router(dashboard.router)
