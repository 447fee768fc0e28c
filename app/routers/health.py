"""
Health check endpoints for the API.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Dict, Any
from datetime import datetime

from app.config import settings
from app.db.database import get_db
from app.db.init_db import check_connection
from app.db.repositories import NodeRepository
from app.dependencies import get_result_cache
from app.domain.ports import ResultCachePort

router = APIRouter()

@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.
    Returns API status and version information.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT
    }

@router.get("/health/cache")
def cache_health(
    cache: ResultCachePort = Depends(get_result_cache)
) -> Dict[str, Any]:
    """
    Check result cache health.
    Returns whether caching is enabled and the cache statistics.
    """
    try:
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "enabled": settings.CACHE_ENABLED,
            "cache_stats": cache.stats(),
        }

    except Exception as e:
        return {
            "status": "unhealthy",
            "timestamp": datetime.now().isoformat(),
            "error": str(e)
        }

@router.get("/health/database")
def database_health(
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Check database health.
    Verifies the connection and reports node and edge counts.
    """
    try:
        if not check_connection(db):
            raise RuntimeError("Database did not answer SELECT 1")

        repo = NodeRepository(db)
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "nodes": repo.count_nodes(),
            "edges": repo.count_edges(),
        }

    except Exception as e:
        return {
            "status": "unhealthy",
            "timestamp": datetime.now().isoformat(),
            "error": str(e)
        }
