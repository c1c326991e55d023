"""
FastAPI application entry point for the local TrekSathi session host.

Run with: uvicorn api.main:app --reload
"""
import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from frontend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.routes import location, posts, weather
from settings import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Create app
app = FastAPI(
    title="TrekSathi",
    description="Travel guide for Nepal: nearby places, weather and travel posts",
    version="0.1.0",
)

# CORS middleware for browser clients
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure properly for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(location.router, prefix="/location", tags=["location"])
app.include_router(weather.router, prefix="/weather", tags=["weather"])
app.include_router(posts.router, prefix="/posts", tags=["posts"])


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "TrekSathi"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
