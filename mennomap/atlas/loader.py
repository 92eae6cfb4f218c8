"""
Feature Loader - Startup fetch of the two GeoJSON documents.

Both documents are fetched concurrently and joined before the store is
built, so a store is never constructed from a partial load.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import httpx

from mennomap.config import get_config
from mennomap.data.schemas.models import FeatureLoadError, FeatureStore
from mennomap.utils.logger import get_logger

logger = get_logger(__name__)


def is_remote(source: str) -> bool:
    """Whether a source is an http(s) URL rather than a local path."""
    return source.startswith(("http://", "https://"))


def _read_json_file(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


async def fetch_document(source: str, timeout: Optional[float] = None) -> Any:
    """
    Fetch and parse one GeoJSON document.

    Args:
        source: Local file path or http(s) URL
        timeout: HTTP timeout in seconds (defaults to config)

    Returns:
        Parsed JSON document

    Raises:
        FeatureLoadError: If the document cannot be read or parsed
    """
    if timeout is None:
        timeout = get_config().data.fetch_timeout

    try:
        if is_remote(source):
            async with httpx.AsyncClient(timeout=timeout) as client:
                resp = await client.get(source)
                resp.raise_for_status()
                document = resp.json()
        else:
            document = await asyncio.to_thread(_read_json_file, Path(source))
    except (OSError, ValueError, httpx.HTTPError) as e:
        raise FeatureLoadError(f"Failed to load {source}: {e}") from e

    logger.debug(f"Fetched document {source}")
    return document


async def load_feature_store(
    colonies_source: Optional[str] = None,
    arrows_source: Optional[str] = None,
    timeout: Optional[float] = None
) -> FeatureStore:
    """
    Load the feature store from the colonies and migration arrow documents.

    Args:
        colonies_source: Colony document (defaults to config)
        arrows_source: Migration arrow document (defaults to config)
        timeout: HTTP timeout in seconds (defaults to config)

    Returns:
        FeatureStore built from both documents

    Raises:
        FeatureLoadError: If either document fails to load or parse
    """
    data_config = get_config().data
    colonies_source = colonies_source or data_config.colonies_source
    arrows_source = arrows_source or data_config.arrows_source

    logger.info(f"Loading features from {colonies_source} and {arrows_source}")

    colonies_doc, arrows_doc = await asyncio.gather(
        fetch_document(colonies_source, timeout),
        fetch_document(arrows_source, timeout),
    )

    store = FeatureStore.from_documents(colonies_doc, arrows_doc)
    counts = store.counts()
    logger.info(
        f"Loaded {counts['colonies']} colonies and {counts['arrows']} migration arrows"
    )
    return store
