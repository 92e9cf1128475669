"""
Proofdiff Backend - FastAPI Application Entry Point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from proofdiff.routers import config, diff, proofread
from proofdiff.services.config_manager import ConfigManager

logger = logging.getLogger("proofdiff")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    logger.info("[Backend] Starting Proofdiff Backend...")
    config_manager = ConfigManager.get_instance()
    logger.info("[Backend] ConfigManager initialized (%s)", config_manager.config_file)

    yield
    logger.info("[Backend] Shutting down Proofdiff Backend (%d open sessions)", len(proofread.store))


app = FastAPI(
    title="Proofdiff Backend",
    description="Text diff and proofreading annotation backend",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware for the local front end
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(diff.router, prefix="/api/diff", tags=["diff"])
app.include_router(proofread.router, prefix="/api/proofread", tags=["proofread"])
app.include_router(config.router, prefix="/api/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "proofdiff-backend"}


def run():
    """Console entry point"""
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    server = ConfigManager.get_instance().get_config()["server"]
    uvicorn.run(app, host=server["host"], port=server["port"])


if __name__ == "__main__":
    run()
