"""
Mock Restaurant Backend

In-memory stand-in for the restaurant REST API, for local development and
tests of the storefront checkout.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .routes import orders_router, cart_router, payments_router

# Load environment variables
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "config", ".env"))

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Mock Backend starting up...")
    yield
    logger.info("Mock Backend shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Mock Restaurant Backend",
    description="Simulated restaurant API for storefront checkout testing",
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

# Include API routers
app.include_router(orders_router)
app.include_router(cart_router)
app.include_router(payments_router)


@app.get("/")
async def home():
    """Service index"""
    return {
        "message": "Mock Restaurant Backend",
        "docs": "/docs",
        "endpoints": {
            "orders": "/create_order/{user_id}",
            "cart": "/remove_from_cart/{user_id}",
            "payments": "/paypal_payment",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "mock-backend"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mock_backend.main:app",
        host="0.0.0.0",
        port=int(os.getenv("MOCK_BACKEND_PORT", "8001")),
        reload=True,
    )
