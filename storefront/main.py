"""
Storefront Application

Customer-facing service for the restaurant: cart and checkout.
"""

import os
import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .routes import cart_router, checkout_router
from .routes import dependencies
from .core.config import settings
from .core.session import session_manager

# Load environment variables
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "config", ".env"))

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def cleanup_sessions_periodically():
    """Drop idle customer sessions on a fixed interval"""
    while True:
        await asyncio.sleep(settings.session_cleanup_interval_seconds)
        removed = session_manager.cleanup_old_sessions(settings.session_max_age_hours)
        if removed:
            logger.info(f"Removed {removed} idle sessions")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Storefront starting up...")
    logger.info(f"Backend URL: {settings.backend_base_url}")
    logger.info(f"PayPal configured: {settings.paypal_configured}")

    cleanup_task = asyncio.create_task(cleanup_sessions_periodically())

    yield

    logger.info("Storefront shutting down...")
    cleanup_task.cancel()
    if dependencies.backend_client:
        await dependencies.backend_client.close()
    if dependencies.payment_registry:
        await dependencies.payment_registry.close()


# Create FastAPI app
app = FastAPI(
    title="Restaurant Storefront",
    description="Cart and checkout for restaurant customers",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(cart_router)
app.include_router(checkout_router)


@app.get("/")
async def home():
    """Service index"""
    return {
        "message": "Restaurant Storefront API",
        "docs": "/docs",
        "endpoints": {
            "cart": "/api/cart",
            "checkout": "/api/checkout",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "storefront",
        "backend_configured": bool(settings.backend_base_url),
        "paypal_configured": settings.paypal_configured,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
