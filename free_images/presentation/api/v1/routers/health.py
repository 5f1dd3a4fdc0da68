"""
Health check API endpoints
"""

from fastapi import APIRouter
from free_images.core.monitoring import health_checker, SystemHealth

router = APIRouter(tags=["health"])


@router.get("/health", response_model=SystemHealth)
async def health_check():
    """
    Health check endpoint that returns process status and the active provider
    """
    return health_checker.get_system_health()


@router.get("/")
async def root():
    """
    Root endpoint
    """
    return {"message": "Free Images API is running", "status": "healthy"}
