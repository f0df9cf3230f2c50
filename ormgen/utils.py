"""Schema definition loading.

A schema definition is a JSON document, read from disk or fetched over
HTTP. Every failure surfaces as ``SchemaLoaderError`` (or
``FileNotFoundError`` for a missing file) with the source in the message.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)


class SchemaLoaderError(Exception):
    """Raised when a schema definition cannot be loaded."""

    pass


def load_definition_from_file(file_path: str | Path) -> tuple[str, Any]:
    """Read a schema definition from a JSON file.

    Returns:
        ``(source, definition)`` where source is the file path.

    Raises:
        FileNotFoundError: The file does not exist.
        SchemaLoaderError: The file is unreadable or not valid JSON.
    """
    path = Path(file_path)
    logger.debug("Reading schema definition %s", path)

    if not path.is_file():
        raise FileNotFoundError(f"Schema definition not found: {path}")
    if path.suffix.lower() != ".json":
        logger.warning("Schema definition %s has no .json extension", path)

    try:
        definition = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SchemaLoaderError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise SchemaLoaderError(f"Cannot read {path}: {e}") from e

    logger.info("Loaded schema definition from %s", path)
    return str(path), definition


def load_definition_from_url(url: str, timeout: int = 30) -> tuple[str, Any]:
    """Fetch a schema definition over HTTP.

    Args:
        url: Absolute http(s) URL of the JSON document.
        timeout: Request timeout in seconds.

    Returns:
        ``(source, definition)`` where source is the URL.

    Raises:
        SchemaLoaderError: Bad URL, network or HTTP failure, or a body that
            is not JSON.
    """
    parsed = urlparse(url)
    if not (parsed.scheme and parsed.netloc):
        raise SchemaLoaderError(f"Invalid URL: {url}")

    logger.debug("Fetching schema definition %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        definition = response.json()
    except requests.exceptions.Timeout as e:
        raise SchemaLoaderError(f"Request timeout after {timeout}s: {url}") from e
    except requests.exceptions.ConnectionError as e:
        raise SchemaLoaderError(f"Cannot connect to {url}") from e
    except requests.exceptions.HTTPError as e:
        raise SchemaLoaderError(
            f"HTTP error {e.response.status_code} fetching {url}"
        ) from e
    # Subclass of RequestException, so it must come first
    except requests.exceptions.JSONDecodeError as e:
        raise SchemaLoaderError(f"Invalid JSON response from {url}: {e}") from e
    except requests.exceptions.RequestException as e:
        raise SchemaLoaderError(f"Request to {url} failed: {e}") from e

    logger.info("Loaded schema definition from %s", url)
    return url, definition


def load_schema_definition(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, Any]:
    """Load a schema definition from exactly one of a file or a URL.

    Raises:
        SchemaLoaderError: Neither or both sources given, or loading failed.
        FileNotFoundError: The file does not exist.
    """
    if file_path and url:
        raise SchemaLoaderError("Cannot specify both file_path and url")
    if file_path:
        return load_definition_from_file(file_path)
    if url:
        return load_definition_from_url(url, timeout)
    raise SchemaLoaderError("Either file_path or url must be provided")
