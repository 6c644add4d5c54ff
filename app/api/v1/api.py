# === backend/app/api/v1/api.py ===
from fastapi import APIRouter
from .endpoints import routes

api_router = APIRouter()
api_router.include_router(routes.router, tags=["Registry"])
