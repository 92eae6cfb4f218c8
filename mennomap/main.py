"""
MennoMap - Main Entry Point

Starts the interactive atlas of Mennonite colonies and migration routes
in Latin America, or filters the features for a single year without a UI.

Usage:
    python -m mennomap.main [--host HOST] [--port PORT] [--colonies SRC] [--arrows SRC]
    python -m mennomap.main --no-ui --year 1930
    python -m mennomap.main --api-only
"""

import argparse
import asyncio
import sys
from typing import Optional

from dotenv import load_dotenv

from mennomap.config import get_config
from mennomap.data.schemas.models import FeatureLoadError
from mennomap.utils.logger import get_logger

# Load environment variables
load_dotenv()

logger = get_logger("mennomap.main")


async def run_headless(
    year: int,
    colonies_source: Optional[str] = None,
    arrows_source: Optional[str] = None
) -> dict:
    """
    Load the features and log what is visible in one year.

    Args:
        year: Year to filter by
        colonies_source: Colony document (defaults to config)
        arrows_source: Migration arrow document (defaults to config)

    Returns:
        The atlas context as a dict
    """
    from mennomap.atlas.loader import load_feature_store
    from mennomap.atlas.state import create_context
    from mennomap.forge.dashboard.components import format_legend

    store = await load_feature_store(colonies_source, arrows_source)
    context = create_context(store, year)

    logger.info(format_legend(context.selected_year))
    for feature in context.features_for(tuple(sorted(context.visible.colonies))):
        props = feature.properties
        logger.info(f"Colony: {props.get('Name')}, {props.get('Country')} ({feature.year})")
    for feature in context.features_for(tuple(sorted(context.visible.arrows))):
        logger.info(f"Migration arrow: {feature.feature_id} ({feature.year})")

    return context.to_dict()


def run_ui(host: str, port: int) -> None:
    """
    Run the NiceGUI-based user interface.

    Args:
        host: Host to bind to
        port: Port to bind to
    """
    from mennomap.forge.ui import create_app, run_app

    create_app()
    run_app(host=host, port=port)


def run_api(host: str, port: int) -> None:
    """
    Run only the REST API.

    Args:
        host: Host to bind to
        port: Port to bind to
    """
    from mennomap.atlas.loader import load_feature_store
    from mennomap.forge.app import attach_store, create_app, run_server

    api = create_app()
    attach_store(api, asyncio.run(load_feature_store()))
    run_server(api, host=host, port=port)


def main():
    """Main entry point."""
    config = get_config()

    parser = argparse.ArgumentParser(
        description="MennoMap - Mennonite colonies and migrations in Latin America"
    )
    parser.add_argument(
        "--host",
        default=config.ui.host,
        help="Host to bind the UI server"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=config.ui.port,
        help="Port to bind the UI server"
    )
    parser.add_argument(
        "--colonies",
        help="Colony GeoJSON (path or URL)"
    )
    parser.add_argument(
        "--arrows",
        help="Migration arrow GeoJSON (path or URL)"
    )
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Run in headless mode (no UI)"
    )
    parser.add_argument(
        "--year",
        type=int,
        default=config.timeline.default_year,
        help="Year to filter by in headless mode"
    )
    parser.add_argument(
        "--api-only",
        action="store_true",
        help="Serve only the REST API"
    )

    args = parser.parse_args()

    if args.colonies:
        config.data.colonies_source = args.colonies
    if args.arrows:
        config.data.arrows_source = args.arrows

    try:
        if args.no_ui:
            asyncio.run(run_headless(args.year))
        elif args.api_only:
            run_api(args.host, args.port)
        else:
            run_ui(args.host, args.port)
    except FeatureLoadError as e:
        logger.error(f"Could not load map data: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
