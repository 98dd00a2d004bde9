"""
Dataset Loader

Fetches the two source documents (college profiles and closing ranks),
parses them and joins them. A source starting with http:// or https:// is
fetched over HTTP; anything else is read from the local filesystem.

DatasetCache owns the loaded dataset for one session: the first `get()`
loads, every later call returns the same object without re-fetching.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import httpx

from .config import Settings, get_settings
from .logic.contracts import JoinedDataset
from .logic.joiner import join_datasets

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = (
    "Failed to load the college database. Serve the data files over HTTP "
    "(not file://) or set COLLEGE_PROFILES_SOURCE and CLOSING_RANKS_SOURCE "
    "to readable JSON files."
)


class DatasetLoadError(RuntimeError):
    """The dataset could not be fetched or parsed. Fatal for the session."""


def _is_url(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")


async def _read_source(source: str, client: httpx.AsyncClient) -> Any:
    if _is_url(source):
        response = await client.get(source)
        response.raise_for_status()
        return response.json()

    text = await asyncio.to_thread(Path(source).read_text, encoding="utf-8")
    return json.loads(text)


async def fetch_document(source: str, client: httpx.AsyncClient) -> List[Any]:
    """
    Fetch one JSON array document.

    Raises:
        DatasetLoadError: on HTTP/transport errors, unreadable files,
            invalid JSON, or a document that is not a JSON array
    """
    try:
        data = await _read_source(source, client)
    except httpx.HTTPError as e:
        raise DatasetLoadError(f"{LOAD_ERROR_MESSAGE} ({source}: {e})") from e
    except OSError as e:
        raise DatasetLoadError(f"{LOAD_ERROR_MESSAGE} ({source}: {e})") from e
    except ValueError as e:
        raise DatasetLoadError(f"{LOAD_ERROR_MESSAGE} ({source}: invalid JSON: {e})") from e

    if not isinstance(data, list):
        raise DatasetLoadError(
            f"{LOAD_ERROR_MESSAGE} ({source}: expected a JSON array, got {type(data).__name__})"
        )
    return data


async def load_dataset(
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None
) -> JoinedDataset:
    """
    Fetch both documents concurrently and join them.

    Args:
        settings: Source locations and HTTP timeout (defaults to environment)
        client: Optional shared HTTP client; one is created when omitted

    Returns:
        JoinedDataset
    """
    settings = settings or get_settings()
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=settings.http_timeout)

    logger.info(
        f"Loading college database from {settings.profiles_source} and {settings.closing_ranks_source}"
    )
    tasks = [
        asyncio.ensure_future(fetch_document(settings.profiles_source, client)),
        asyncio.ensure_future(fetch_document(settings.closing_ranks_source, client)),
    ]
    try:
        profiles, closing_ranks = await asyncio.gather(*tasks)
    except BaseException as e:
        # gather does not cancel the sibling fetch; stop it before the client closes
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        if isinstance(e, DatasetLoadError):
            logger.error(f"Dataset load failed: {e}")
        raise
    finally:
        if owns_client:
            await client.aclose()

    return join_datasets(profiles, closing_ranks)


class DatasetCache:
    """
    Session-owned, load-once holder for the joined dataset.

    Concurrent callers share one load. A failed load caches nothing, so the
    next `get()` tries again from scratch.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.settings = settings or get_settings()
        self._client = client
        self._dataset: Optional[JoinedDataset] = None
        self._lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._dataset is not None

    async def get(self) -> JoinedDataset:
        if self._dataset is not None:
            return self._dataset

        async with self._lock:
            if self._dataset is None:
                self._dataset = await load_dataset(self.settings, self._client)
        return self._dataset

    def clear(self) -> None:
        self._dataset = None
