from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

import aiohttp

from .errors import FetchError, OutputWriteError

logger = logging.getLogger("ghproxy.fetch")

DEFAULT_USER_AGENT = "ghproxy-lists/1.0"


def fetch_script(
    url: str,
    dest_path: str,
    *,
    timeout: float = 15.0,
    verify_ssl: bool = True,
    user_agent: Optional[str] = None,
) -> int:
    """Download `url` into `dest_path` (single request, no retries). Returns bytes written."""

    async def _run() -> bytes:
        headers = {"User-Agent": user_agent or DEFAULT_USER_AGENT}
        connector = aiohttp.TCPConnector(ssl=verify_ssl)
        client_timeout = aiohttp.ClientTimeout(total=timeout)
        async with aiohttp.ClientSession(headers=headers, timeout=client_timeout, connector=connector, trust_env=False) as session:
            async with session.get(url) as resp:
                if not (200 <= resp.status < 400):
                    raise FetchError(url, f"HTTP {resp.status}")
                return await resp.read()

    logger.info("fetch: downloading %s -> %s", url, dest_path)
    try:
        body = asyncio.run(_run())
    except FetchError:
        raise
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        raise FetchError(url, e) from e

    parent = os.path.dirname(dest_path)
    try:
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(dest_path, "wb") as f:
            f.write(body)
    except OSError as e:
        raise OutputWriteError(dest_path, e) from e
    logger.debug("fetch: wrote %d bytes to %s", len(body), dest_path)
    return len(body)
