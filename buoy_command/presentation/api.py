from fastapi import APIRouter

from buoy_command.presentation.routers.buoy import router as buoy_router

api = APIRouter()

routers = (buoy_router,)
for router in routers:
    api.include_router(router, prefix="/api")
