"""Remediation advice derived from failed header and SSL observations."""

from typing import List, NamedTuple

from models import AssessmentResult, Priority, Recommendation


class Rule(NamedTuple):
    source: str  # "headers" or "ssl"
    key: str
    title: str
    description: str
    priority: Priority


# Evaluation order is output order.
RULES = (
    Rule(
        "headers", "strict-transport-security",
        "Add Strict-Transport-Security Header",
        "This header ensures users always connect to your site over HTTPS, protecting against downgrade attacks.",
        Priority.HIGH,
    ),
    Rule(
        "headers", "content-security-policy",
        "Implement Content Security Policy",
        "CSP helps prevent XSS attacks by controlling which resources can be loaded on your site.",
        Priority.MEDIUM,
    ),
    Rule(
        "headers", "x-content-type-options",
        "Add X-Content-Type-Options Header",
        "This header prevents browsers from interpreting files as a different MIME type, reducing the risk of attacks.",
        Priority.MEDIUM,
    ),
    Rule(
        "ssl", "secureProtocols",
        "Upgrade TLS Protocol Version",
        "Use TLS 1.2 or higher and disable older, insecure protocols like SSL 3.0 and TLS 1.0.",
        Priority.HIGH,
    ),
    Rule(
        "ssl", "strongCiphers",
        "Strengthen SSL Cipher Suites",
        "Configure your server to use strong, modern cipher suites and disable weak ones.",
        Priority.MEDIUM,
    ),
)


def recommend(headers: AssessmentResult, ssl: AssessmentResult) -> List[Recommendation]:
    """Return one recommendation per failed rule, in rule order. Empty when nothing failed."""
    results = {"headers": headers, "ssl": ssl}
    return [
        Recommendation(title=rule.title, description=rule.description, priority=rule.priority)
        for rule in RULES
        if not results[rule.source].observations.get(rule.key, False)
    ]
