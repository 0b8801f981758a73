"""Utility functions for loading JSON Schema documents.

This module provides functions for loading schemas from files and URLs with
proper error handling and validation.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)


class SchemaLoaderError(Exception):
    """Raised when a schema document cannot be loaded."""

    pass


def is_url(source: str | Path) -> bool:
    """Return True if source looks like an http(s) URL."""
    if isinstance(source, Path):
        return False
    parsed = urlparse(source)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _require_object(data: Any, source: str) -> dict:
    if not isinstance(data, dict):
        raise SchemaLoaderError(f"Schema in {source} must be a JSON object")
    return data


def load_schema_from_file(file_path: str | Path) -> tuple[str, dict]:
    """Load a JSON Schema document from a local file.

    Args:
        file_path: Path to the schema file.

    Returns:
        Tuple of (source description, parsed schema).

    Raises:
        SchemaLoaderError: If the file is missing, unreadable or not a JSON object.
    """
    file_path = Path(file_path)
    logger.debug("Loading schema from file: %s", file_path)

    if not file_path.is_file():
        raise SchemaLoaderError(f"File not found: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SchemaLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        raise SchemaLoaderError(f"Error reading file {file_path}: {e}") from e

    logger.info("Loaded schema from %s", file_path)
    return str(file_path), _require_object(data, str(file_path))


def load_schema_from_url(url: str, timeout: int = 30) -> tuple[str, dict]:
    """Load a JSON Schema document from a URL.

    Args:
        url: URL to fetch the schema from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed schema).

    Raises:
        SchemaLoaderError: If the request fails or the response isn't a JSON object.
    """
    logger.debug("Loading schema from URL: %s", url)

    if not is_url(url):
        raise SchemaLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if "json" not in content_type:
            logger.warning("URL %s does not have a JSON content type: %s", url, content_type)

        data = response.json()
    except requests.exceptions.Timeout as e:
        raise SchemaLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        raise SchemaLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        raise SchemaLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.JSONDecodeError as e:
        raise SchemaLoaderError(f"Invalid JSON response from URL {url}: {e}") from e
    except requests.exceptions.RequestException as e:
        raise SchemaLoaderError(f"Request error for URL {url}: {e}") from e

    logger.info("Loaded schema from %s", url)
    return url, _require_object(data, url)


def load_schema(source: str | Path, timeout: int = 30) -> tuple[str, dict]:
    """Load a JSON Schema document from a file path or an http(s) URL.

    Raises:
        SchemaLoaderError: If loading fails.
    """
    if is_url(source):
        return load_schema_from_url(str(source), timeout)
    return load_schema_from_file(source)
