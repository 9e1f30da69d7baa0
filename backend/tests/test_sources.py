import asyncio

import pytest

from models import HEADER_NAMES, SSL_CHECKS
from sources import DemoScanDataSource, FixtureScanDataSource, LiveScanDataSource, get_data_source


def test_demo_source_is_deterministic_per_domain():
    source = DemoScanDataSource()
    # ord-sum of "example.com" is 1113: divisible by 3 and 7 only
    assert source.domain_sum("example.com") == 1113
    headers = asyncio.run(source.fetch_header_observations("example.com"))
    assert headers == {
        "strict-transport-security": True,
        "content-security-policy": True,
        "x-content-type-options": False,
        "x-frame-options": True,
        "referrer-policy": False,
        "permissions-policy": True,
    }
    ssl = asyncio.run(source.fetch_ssl_observations("example.com"))
    assert ssl == {"validCertificate": True, "strongCiphers": True, "secureProtocols": False, "certChainValid": True}
    assert asyncio.run(source.fetch_ssl_observations("example.com")) == ssl


def test_demo_source_covers_fixed_enumerations():
    source = DemoScanDataSource()
    assert list(asyncio.run(source.fetch_header_observations("a.io"))) == list(HEADER_NAMES)
    assert list(asyncio.run(source.fetch_ssl_observations("a.io"))) == list(SSL_CHECKS)


def test_fixture_source_uses_per_host_and_default_values():
    source = FixtureScanDataSource(
        headers={"bad.test": {}},
        default_ssl={"validCertificate": True},
    )
    assert asyncio.run(source.fetch_header_observations("bad.test")) == {}
    assert all(asyncio.run(source.fetch_header_observations("other.test")).values())
    assert asyncio.run(source.fetch_ssl_observations("other.test")) == {"validCertificate": True}
    assert source.calls == [("headers", "bad.test"), ("headers", "other.test"), ("ssl", "other.test")]


def test_get_data_source():
    assert isinstance(get_data_source("live"), LiveScanDataSource)
    assert isinstance(get_data_source("demo"), DemoScanDataSource)
    with pytest.raises(ValueError):
        get_data_source("nmap")
