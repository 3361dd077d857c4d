"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from grid_scout.api.routes.scouting import router as scouting_router
from grid_scout.api.routes.valorant import router as valorant_router
from grid_scout.config import settings
from grid_scout.repositories.document_store import DuckDBDocumentStore
from grid_scout.services.reference_tables import ReferenceTables

logging.basicConfig(level=settings.log_level)


def resolve_path(configured: str) -> Path:
    """Resolve a configured path; relative paths are taken from the repo root."""
    path = Path(configured)
    if path.is_absolute():
        return path
    repo_root = Path(__file__).parent.parent.parent
    return repo_root / path


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Tests install their own store and tables before startup
    if not hasattr(app.state, "store"):
        app.state.store = DuckDBDocumentStore(str(resolve_path(settings.database_path)))
    if not hasattr(app.state, "tables"):
        app.state.tables = ReferenceTables.load(resolve_path(settings.knowledge_dir))
    yield


app = FastAPI(
    title="Grid Scout",
    description="Esports scouting reports from match event data",
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "grid-scout"}


# Register routers
app.include_router(scouting_router)
app.include_router(valorant_router)
