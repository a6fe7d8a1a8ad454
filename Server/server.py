"""
Watchpost Server - Main FastAPI Application

This module contains the main FastAPI application for the Watchpost web
console: role management and user preferences.
"""

import logging
from logging.handlers import RotatingFileHandler
from datetime import datetime
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
import uvicorn

import app_config
from version import VERSION

# Configure logging to write to both console and file
# Create logs directory if it doesn't exist
logs_dir = Path("logs")
logs_dir.mkdir(exist_ok=True)

# Create log filename with timestamp
log_filename = logs_dir / f"watchpost-server-{datetime.now().strftime('%Y-%m-%d')}.log"

# Configure logging with both console and file handlers
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        # Console handler
        logging.StreamHandler(),
        # File handler with rotation (max 10MB per file, keep 10 backup files)
        RotatingFileHandler(
            log_filename,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=10,
            encoding='utf-8'
        )
    ]
)
logger = logging.getLogger(__name__)

# Import database module for shared db_manager instance
import database
from managers.database_manager import DatabaseManager


# ==================== Lifespan Events ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan event handler for startup and shutdown
    Manages database initialization
    """
    # Startup
    logger.info("Watchpost Server starting up...")

    # Initialize database manager in database module
    if database.db_manager is None:
        database.db_manager = DatabaseManager(app_config.DATABASE_PATH)
    database.db_manager.InitializeDatabase()
    logger.info("Database initialized successfully")

    app_config.CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    logger.info(f"Using configuration directory {app_config.CONFIG_DIR.resolve()}")

    logger.info("Server startup complete")

    yield

    # Shutdown
    logger.info("Watchpost Server shutting down...")
    logger.info("Shutdown complete")


# ==================== FastAPI Application ====================

app = FastAPI(
    title="Watchpost Server",
    description="Web console for monitoring roles and user preferences",
    version=VERSION,
    lifespan=lifespan
)

# ==================== Static Files ====================

# Get the directory where this script is located
script_dir = Path(__file__).parent

# Mount static files directory for CSS/JS assets
app.mount("/static", StaticFiles(directory=str(script_dir / "static")), name="static")


# ==================== Import Routers ====================

from routes import status, preferences
from routes.admin import roles as admin_roles


# ==================== Include Routers ====================

app.include_router(status.router)
app.include_router(preferences.router)
app.include_router(admin_roles.router)


@app.get("/", include_in_schema=False)
async def root():
    """Redirect / to the preferences page"""
    return RedirectResponse(url="/preferences", status_code=303)


# ==================== Main Entry Point ====================

if __name__ == "__main__":
    """
    Run the server using uvicorn
    """
    logger.info("Starting Watchpost Server...")

    # Run server with uvicorn
    # host="0.0.0.0" allows connections from other machines on the network
    uvicorn.run(
        "server:app",
        host="0.0.0.0",
        port=8080,
        reload=False,
        log_level="info"
    )
