"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from sopflow.api.v1.dependencies.
"""

from fastapi import APIRouter

from sopflow.api.v1.endpoints import health, templates, workflows

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(templates.router, prefix="/templates", tags=["templates"])
api_router.include_router(workflows.router, prefix="/workflows", tags=["workflows"])
