"""HTTP security header probing: fetch a site and report which graded headers it sends."""

import asyncio
import logging
from typing import Dict

import aiohttp

import settings
from errors import ScanSourceError, ScanTimeout
from models import HEADER_NAMES

logger = logging.getLogger(__name__)


async def fetch_headers(url: str) -> Dict[str, str]:
    """Fetch *url* and return its response headers with lowercased names."""
    timeout = aiohttp.ClientTimeout(total=settings.FETCH_TIMEOUT)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        async with session.get(url, allow_redirects=True, ssl=False) as resp:
            return {k.lower(): v for k, v in resp.headers.items()}


def header_observations(headers: Dict[str, str]) -> Dict[str, bool]:
    # An empty value counts as missing.
    return {name: bool(headers.get(name, "").strip()) for name in HEADER_NAMES}


async def fetch_observations(hostname: str) -> Dict[str, bool]:
    url = f"https://{hostname}"
    try:
        headers = await fetch_headers(url)
    except asyncio.TimeoutError:
        raise ScanTimeout(f"{hostname} did not respond in time.")
    except aiohttp.ClientError as e:
        logger.warning("header fetch failed for %s: %s", hostname, e)
        raise ScanSourceError(f"Could not reach target site: {type(e).__name__}: {e}")
    observations = header_observations(headers)
    logger.debug("header observations for %s: %s", hostname, observations)
    return observations
