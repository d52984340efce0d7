from fastapi import APIRouter, Depends
from loguru import logger

from inventory.api.dependencies import get_dashboard_service
from inventory.schemas.dashboard import DashboardResponse
from inventory.services.dashboard import DashboardService

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(service: DashboardService = Depends(get_dashboard_service)) -> DashboardResponse:
    """Summary statistics over the active catalog."""
    logger.info("Getting dashboard data")
    return await service.get_dashboard()
