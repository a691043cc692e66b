"""API v1 main router - aggregates all endpoint routers."""

from fastapi import APIRouter

from app.api.v1 import dashboard, sources, stock, summaries, system, users

api_router = APIRouter()

# Main endpoints
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(summaries.router, prefix="/summaries", tags=["summaries"])
api_router.include_router(sources.router, tags=["sources"])
api_router.include_router(stock.router, prefix="/stock", tags=["stock"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(system.router)
