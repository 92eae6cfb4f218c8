"""
Forge App - FastAPI server for MennoMap.

This module provides the REST API layer for querying which colonies and
migration arrows are visible in a given year.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from typing import Optional, Dict, Any
import uvicorn

from mennomap import __version__
from mennomap.atlas.temporal import visible_arrows, visible_colonies
from mennomap.config import get_config
from mennomap.data.schemas.models import FeatureStore
from mennomap.utils.converters import to_year
from mennomap.utils.logger import get_logger

logger = get_logger(__name__)


def create_app(
    store: Optional[FeatureStore] = None,
    title: str = "MennoMap API",
    version: str = __version__,
    description: str = "Mennonite colonies and migrations in Latin America by year"
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Feature store to serve (can be attached later)
        title: API title
        version: API version
        description: API description

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=title,
        version=version,
        description=description
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store

    def require_store() -> FeatureStore:
        if app.state.store is None:
            raise HTTPException(
                status_code=503,
                detail="Feature store not loaded"
            )
        return app.state.store

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        """Health check with loaded feature counts."""
        store = app.state.store
        return {
            "status": "healthy" if store is not None else "loading",
            "features": store.counts() if store is not None else {},
            "version": version
        }

    @app.get("/years")
    async def get_years() -> Dict[str, Any]:
        """Distinct feature years and the slider range."""
        store = require_store()
        timeline = get_config().timeline
        return {
            "years": store.years(),
            "min_year": timeline.min_year,
            "max_year": timeline.max_year,
            "default_year": timeline.default_year,
        }

    @app.get("/visible/{year}")
    async def get_visible(year: str) -> Dict[str, Any]:
        """
        Features visible in a year.

        Returns:
            Year plus colonies and arrows as GeoJSON FeatureCollections
        """
        selected = to_year(year)
        if selected is None:
            raise HTTPException(status_code=400, detail=f"Invalid year: {year}")

        store = require_store()
        return {
            "year": selected,
            "colonies": store.colonies.to_geojson(visible_colonies(store, selected)),
            "arrows": store.arrows.to_geojson(visible_arrows(store, selected)),
        }

    return app


def attach_store(app: FastAPI, store: FeatureStore) -> None:
    """
    Attach a loaded feature store to the FastAPI app.

    Args:
        app: FastAPI application instance
        store: Loaded FeatureStore
    """
    app.state.store = store
    counts = store.counts()
    logger.info(
        f"Feature store attached to API ({counts['colonies']} colonies, "
        f"{counts['arrows']} arrows)"
    )


def run_server(
    app: FastAPI,
    host: str = "0.0.0.0",
    port: int = 8000,
    reload: bool = False
) -> None:
    """
    Run the FastAPI server.

    Args:
        app: FastAPI application instance
        host: Host to bind to
        port: Port to bind to
        reload: Enable auto-reload for development
    """
    uvicorn.run(app, host=host, port=port, reload=reload)
