"""Scan orchestration: fetch both observation sets concurrently, then grade and advise."""

import asyncio
import logging
import time
from urllib.parse import urlparse

import settings
from errors import InvalidInput, ScanTimeout
from grading import CANONICAL_SCHEME, aggregate, assess_headers, assess_ssl, normalize, weighted_score
from models import AssessmentResult, SecurityReport
from recommendations import recommend
from sources import ScanDataSource

logger = logging.getLogger(__name__)


def validate_target_url(raw_url) -> str:
    """Boundary check for user input. Returns the URL with a scheme, or raises InvalidInput."""
    v = (raw_url or "").strip()
    if not v:
        raise InvalidInput("URL is required")
    if "://" not in v:
        v = f"https://{v}"
    try:
        parsed = urlparse(v)
        hostname = parsed.hostname
        if hostname:
            # labels over 63 chars or otherwise unencodable fail here, not in the socket layer
            hostname.encode("idna")
    except ValueError:
        raise InvalidInput("Invalid URL format")
    if parsed.scheme not in ("http", "https") or not hostname:
        raise InvalidInput("Invalid URL format")
    return v


async def _with_timeout(coro, timeout: float, what: str):
    try:
        return await asyncio.wait_for(coro, timeout=timeout)
    except asyncio.TimeoutError:
        raise ScanTimeout(f"{what} timed out.")


async def assess_url_headers(url: str, source: ScanDataSource,
                             timeout: float = settings.SCAN_TIMEOUT) -> AssessmentResult:
    hostname = normalize(url)
    observations = await _with_timeout(source.fetch_header_observations(hostname), timeout, "Header scan")
    return assess_headers(observations)


async def assess_url_ssl(url: str, source: ScanDataSource,
                         timeout: float = settings.SCAN_TIMEOUT) -> AssessmentResult:
    hostname = normalize(url)
    observations = await _with_timeout(source.fetch_ssl_observations(hostname), timeout, "SSL scan")
    return assess_ssl(observations)


async def run_scan(url: str, source: ScanDataSource, timeout: float = settings.SCAN_TIMEOUT) -> SecurityReport:
    start = time.time()
    hostname = normalize(url)
    logger.info("scanning %s with %s source", hostname, source.name)

    header_obs, ssl_obs = await _with_timeout(
        asyncio.gather(
            source.fetch_header_observations(hostname),
            source.fetch_ssl_observations(hostname),
        ),
        timeout,
        "Security scan",
    )

    headers = assess_headers(header_obs)
    ssl = assess_ssl(ssl_obs)
    report = SecurityReport(
        url=url,
        hostname=hostname,
        overall_grade=aggregate(headers.grade, ssl.grade, CANONICAL_SCHEME),
        overall_score=weighted_score(headers.grade, ssl.grade, CANONICAL_SCHEME),
        headers=headers,
        ssl=ssl,
        recommendations=recommend(headers, ssl),
    )
    logger.info("scan of %s finished in %.2fs: overall %s (headers %s, ssl %s)",
                hostname, time.time() - start, report.overall_grade.value,
                headers.grade.value, ssl.grade.value)
    return report
