"""
Main FastAPI application for the OFSL League Schedule Service.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ofsl_schedule import __version__
from ofsl_schedule.api import routes
from ofsl_schedule.core.config import CORS_ORIGINS, LOG_LEVEL
from ofsl_schedule.core.logging_config import setup_logging

setup_logging(LOG_LEVEL)

app = FastAPI(
    title="OFSL League Schedule API",
    description="API for weekly league schedules, game formats and tier management",
    version=__version__
)

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(routes.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "OFSL League Schedule API",
        "version": __version__,
        "endpoints": {
            "formats": "/api/formats",
            "current_week": "/api/leagues/{league_id}/current-week",
            "tiers": "/api/leagues/{league_id}/weeks/{week_number}/tiers",
            "health": "/api/health"
        }
    }
