"""
Mindful Web - FastAPI application.

Serves the onboarding API for the mobile client.
"""

from fastapi import FastAPI

from mindful import __version__
from mindful.config import get_settings
from onboarding.api import router as onboarding_router

app = FastAPI(title="Mindful", version=__version__)
app.include_router(onboarding_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    settings = get_settings()
    return {
        "status": "healthy",
        "environment": settings.mindful_env,
        "onboarding_design": settings.onboarding_design,
    }
