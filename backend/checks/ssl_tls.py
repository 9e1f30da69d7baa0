"""SSL/TLS probing: certificate validity, chain trust, protocol version and cipher strength."""

import asyncio
import logging
import socket
import ssl
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import settings
from models import SSL_CHECKS

logger = logging.getLogger(__name__)

SECURE_PROTOCOLS = ("TLSv1.2", "TLSv1.3")
WEAK_CIPHER_MARKERS = ("RC4", "DES", "NULL", "EXPORT", "MD5", "ANON", "ADH", "AECDH")
MIN_CIPHER_BITS = 128

# Verification failures that say nothing about the chain itself.
X509_V_ERR_CERT_HAS_EXPIRED = 10
X509_V_ERR_HOSTNAME_MISMATCH = 62
CHAIN_INTACT_ERRORS = (X509_V_ERR_CERT_HAS_EXPIRED, X509_V_ERR_HOSTNAME_MISMATCH)


def _handshake(hostname: str, port: int = 443, verify: bool = True) -> Dict[str, Any]:
    """Connect via TLS and return cert + protocol info."""
    ctx = ssl.create_default_context()
    if not verify:
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
    with socket.create_connection((hostname, port), timeout=settings.TLS_TIMEOUT) as sock:
        with ctx.wrap_socket(sock, server_hostname=hostname) as ssock:
            return {"cert": ssock.getpeercert(), "protocol": ssock.version(), "cipher": ssock.cipher()}


def _not_expired(cert: dict) -> bool:
    not_after = cert.get("notAfter")
    if not not_after:
        return False
    expires = datetime.strptime(not_after, "%b %d %H:%M:%S %Y %Z").replace(tzinfo=timezone.utc)
    return expires > datetime.now(timezone.utc)


def is_strong_cipher(cipher: Optional[tuple]) -> bool:
    """*cipher* is the (name, protocol, bits) triple from SSLSocket.cipher()."""
    if not cipher:
        return False
    name, _, bits = cipher
    if bits is None or bits < MIN_CIPHER_BITS:
        return False
    upper = name.upper()
    return not any(marker in upper for marker in WEAK_CIPHER_MARKERS)


def probe(hostname: str, port: int = 443) -> Dict[str, bool]:
    """Blocking TLS probe. An unreachable endpoint fails every check."""
    failed = {check: False for check in SSL_CHECKS}
    chain_ok = verified = True
    try:
        info = _handshake(hostname, port)
    except ssl.SSLCertVerificationError as e:
        verified = False
        chain_ok = getattr(e, "verify_code", None) in CHAIN_INTACT_ERRORS
        try:
            info = _handshake(hostname, port, verify=False)
        except (OSError, ValueError) as e2:
            logger.warning("TLS handshake to %s failed: %s", hostname, e2)
            return failed
    except (OSError, ValueError) as e:
        logger.warning("TLS handshake to %s failed: %s", hostname, e)
        return failed

    return {
        "validCertificate": verified and _not_expired(info["cert"]),
        "strongCiphers": is_strong_cipher(info["cipher"]),
        "secureProtocols": info["protocol"] in SECURE_PROTOCOLS,
        "certChainValid": chain_ok,
    }


async def fetch_observations(hostname: str) -> Dict[str, bool]:
    try:
        observations = await asyncio.wait_for(
            asyncio.get_event_loop().run_in_executor(None, probe, hostname),
            timeout=settings.TLS_TIMEOUT * 2,
        )
    except asyncio.TimeoutError:
        logger.warning("TLS probe of %s timed out", hostname)
        return {check: False for check in SSL_CHECKS}
    logger.debug("ssl observations for %s: %s", hostname, observations)
    return observations
