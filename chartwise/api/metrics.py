"""
Metrics endpoint for performance monitoring.
"""
from fastapi import APIRouter
from chartwise.core.performance import PerformanceMonitor

router = APIRouter()


@router.get("/metrics")
async def get_metrics():
    """
    Get performance metrics.

    Returns timing statistics for request handling and every tracked
    profiling / suggestion operation.
    """
    return {
        'performance': PerformanceMonitor.get_all_metrics()
    }
