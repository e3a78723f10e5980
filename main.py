"""Tags Service application entry point.

Builds the FastAPI application and mounts the routers. Run with:

    uvicorn main:app --host 0.0.0.0 --port 8003
"""

import logging

from application.rest.routers import router_health, router_tags
from fastapi import FastAPI
from utils.config import SERVICE_NAME

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Feedback Tags Service",
    description="Tag management for the feedback tracker: create, edit, delete and assign tags",
    version="1.0.0",
)

app.include_router(router_health.router, tags=["health"])
app.include_router(router_tags.router, tags=["tags"])

logger.info(f"{SERVICE_NAME} routes registered")
