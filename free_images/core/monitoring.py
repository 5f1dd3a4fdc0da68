"""
Health check utilities
"""

import os
import time
from datetime import datetime
from typing import Dict, Any

import psutil
from pydantic import BaseModel, ConfigDict

from free_images.core.config import settings


class SystemHealth(BaseModel):
    """System health status model"""

    status: str
    timestamp: datetime
    uptime: float
    provider: str
    provider_api_url: str
    memory_usage: Dict[str, Any]
    process_memory_mb: float

    model_config = ConfigDict()


class HealthChecker:
    """Reports process health and the configured image provider"""

    def __init__(self):
        self.start_time = time.time()

    def get_memory_info(self) -> Dict[str, Any]:
        memory = psutil.virtual_memory()
        return {
            "total": memory.total,
            "available": memory.available,
            "percentage": memory.percent,
        }

    def get_process_memory_mb(self) -> float:
        """Resident memory of this process in MB"""
        rss = psutil.Process(os.getpid()).memory_info().rss
        return round(rss / (1024**2), 2)

    def get_system_health(self) -> SystemHealth:
        memory = self.get_memory_info()

        status = "healthy"
        if memory["percentage"] > 90:
            status = "unhealthy"
        elif memory["percentage"] > 80:
            status = "warning"

        return SystemHealth(
            status=status,
            timestamp=datetime.now(),
            uptime=time.time() - self.start_time,
            provider=settings.provider,
            provider_api_url=settings.provider_api_url,
            memory_usage=memory,
            process_memory_mb=self.get_process_memory_mb(),
        )


# Global health checker instance
health_checker = HealthChecker()
