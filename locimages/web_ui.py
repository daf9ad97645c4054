"""
FastAPI web app for location image search.
Serves the aggregation endpoint and a small gallery page.
"""

import random
from pathlib import Path
from typing import Dict, Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
import uvicorn

from .adapters.manager import AdapterManager
from .aggregator import LocationSearch, MissingLocationError, DEFAULT_SOURCES, parse_sources, parse_coordinates
from .config import load_config, validate_config
from .utils.http_client import HTTPClient
from .utils.logger import get_logger, configure_logging

logger = get_logger("locimages.web_ui")

TEMPLATES_DIR = Path(__file__).parent / "templates"


def create_app(config: Optional[Dict[str, Any]] = None,
               http_client: Optional[HTTPClient] = None,
               rng: Optional[random.Random] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Configuration dictionary; loaded from config.yaml and the
            environment when omitted
        http_client: HTTP client for the adapters (tests pass a stubbed one)
        rng: Random generator for result shuffling

    Returns:
        FastAPI app
    """
    if config is None:
        config = load_config()
    validate_config(config)
    configure_logging(config.get('logging'))

    app = FastAPI(
        title="Location Images",
        description="Aggregate images of any location from several providers",
        version="1.0.0"
    )
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    manager = AdapterManager(config, http_client=http_client or HTTPClient(config.get('http_client', {})))
    location_search = LocationSearch(manager, rng=rng)
    app.state.manager = manager
    app.state.location_search = location_search

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request):
        """Gallery page."""
        return templates.TemplateResponse(request, "index.html", {
            "sources": manager.describe_sources(),
            "default_sources": list(DEFAULT_SOURCES),
        })

    @app.get("/api/search")
    async def search(location: Optional[str] = None,
                     sources: Optional[str] = None,
                     lat: Optional[str] = None,
                     lng: Optional[str] = None):
        """Search all requested sources for images of a location."""
        try:
            response = await location_search.search(
                location,
                parse_sources(sources),
                parse_coordinates(lat, lng),
            )
            return JSONResponse(response.to_dict())

        except MissingLocationError:
            return JSONResponse({"error": "Location is required"}, status_code=400)
        except Exception as e:
            logger.exception(f"Search failed: {e}")
            return JSONResponse({"error": "Search failed"}, status_code=500)

    @app.get("/api/sources")
    async def get_sources():
        """Known sources and whether each is live or on demo data."""
        return {
            "sources": manager.describe_sources(),
            "default": list(DEFAULT_SOURCES),
        }

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    return app


def run_web_ui(host: str = "127.0.0.1", port: int = 8000, reload: bool = False):
    """Run the web server."""
    uvicorn.run(
        "locimages.web_ui:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
        log_level="info"
    )


if __name__ == "__main__":
    run_web_ui()
