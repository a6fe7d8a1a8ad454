"""
Watchpost Server - Status Endpoints

Health check used by load balancers and monitoring.
"""

from datetime import datetime, timezone
from fastapi import APIRouter

from version import VERSION


# Create router instance
router = APIRouter()


# ==================== Health Check Endpoint ====================

@router.get("/health", tags=["Status"])
async def health_check():
    """
    Health check endpoint to verify server is running

    Returns:
        dict: Server status information
    """
    return {
        "status": "healthy",
        "service": "Watchpost Server",
        "version": VERSION,
        "timestamp_utc": datetime.now(timezone.utc).isoformat()
    }
