"""Scan data sources: where raw header and SSL observations come from."""

from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional

from checks import http_headers, ssl_tls
from models import HEADER_NAMES, SSL_CHECKS


class ScanDataSource(ABC):
    """Supplies boolean observations for a hostname. Implementations may be slow and may raise ScanSourceError."""

    name: str = "unnamed"

    @abstractmethod
    async def fetch_header_observations(self, hostname: str) -> Dict[str, bool]:
        ...

    @abstractmethod
    async def fetch_ssl_observations(self, hostname: str) -> Dict[str, bool]:
        ...


class LiveScanDataSource(ScanDataSource):
    """Probes the real site over HTTPS."""

    name = "live"

    async def fetch_header_observations(self, hostname: str) -> Dict[str, bool]:
        return await http_headers.fetch_observations(hostname)

    async def fetch_ssl_observations(self, hostname: str) -> Dict[str, bool]:
        return await ssl_tls.fetch_observations(hostname)


# Moduli for the demo source, in HEADER_NAMES / SSL_CHECKS order.
DEMO_HEADER_MODULI = (5, 4, 3, 2, 7, 8)
DEMO_SSL_MODULI = (5, 4, 3, 2)


class DemoScanDataSource(ScanDataSource):
    """Offline stand-in that derives stable pseudo-random observations from the hostname.

    Not a security scan. Useful for demos and UI work without network access.
    """

    name = "demo"

    @staticmethod
    def domain_sum(hostname: str) -> int:
        return sum(ord(ch) for ch in hostname)

    async def fetch_header_observations(self, hostname: str) -> Dict[str, bool]:
        total = self.domain_sum(hostname)
        return {name: total % m != 0 for name, m in zip(HEADER_NAMES, DEMO_HEADER_MODULI)}

    async def fetch_ssl_observations(self, hostname: str) -> Dict[str, bool]:
        total = self.domain_sum(hostname)
        return {check: total % m != 0 for check, m in zip(SSL_CHECKS, DEMO_SSL_MODULI)}


class FixtureScanDataSource(ScanDataSource):
    """Returns fixed observation sets per hostname, falling back to a default."""

    name = "fixture"

    def __init__(self, headers: Optional[Mapping[str, Mapping[str, bool]]] = None,
                 ssl: Optional[Mapping[str, Mapping[str, bool]]] = None,
                 default_headers: Optional[Mapping[str, bool]] = None,
                 default_ssl: Optional[Mapping[str, bool]] = None):
        self.headers = dict(headers or {})
        self.ssl = dict(ssl or {})
        if default_headers is None:
            default_headers = {name: True for name in HEADER_NAMES}
        if default_ssl is None:
            default_ssl = {check: True for check in SSL_CHECKS}
        self.default_headers = dict(default_headers)
        self.default_ssl = dict(default_ssl)
        self.calls = []

    async def fetch_header_observations(self, hostname: str) -> Dict[str, bool]:
        self.calls.append(("headers", hostname))
        return dict(self.headers.get(hostname, self.default_headers))

    async def fetch_ssl_observations(self, hostname: str) -> Dict[str, bool]:
        self.calls.append(("ssl", hostname))
        return dict(self.ssl.get(hostname, self.default_ssl))


SOURCES = {
    LiveScanDataSource.name: LiveScanDataSource,
    DemoScanDataSource.name: DemoScanDataSource,
}


def get_data_source(name: str) -> ScanDataSource:
    try:
        return SOURCES[name]()
    except KeyError:
        raise ValueError(f"Unknown scan data source {name!r}; expected one of {sorted(SOURCES)}")
