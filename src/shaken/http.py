"""Blocking JSON-over-HTTP helpers, awaited off the event loop."""

from __future__ import annotations

import asyncio
from typing import Any

import requests

USER_AGENT = "shaken/0.1"
DEFAULT_TIMEOUT_SECONDS = 10.0


def sync_get_json(url: str, *, body: Any = None, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Any:
    """GET ``url`` (optionally with a JSON body) and decode the JSON response.

    Raises:
        requests.RequestException: On transport errors, non-2xx statuses or
            undecodable bodies.
    """
    response = requests.get(url, json=body, timeout=timeout, headers={"User-Agent": USER_AGENT})
    response.raise_for_status()
    return response.json()


async def get_json(url: str, *, body: Any = None, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Any:
    return await asyncio.to_thread(sync_get_json, url, body=body, timeout=timeout)
