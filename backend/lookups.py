"""Shared display tables consulted by both the grading core and the renderers."""

import re
from types import MappingProxyType

from grading import parse_grade
from models import AssessmentResult, Grade, Priority

GRADE_DESCRIPTIONS = MappingProxyType({
    Grade.A_PLUS: "Excellent! Your website has exceptional security configurations.",
    Grade.A: "Very good! Your website has strong security measures in place.",
    Grade.B: "Good. Your website has decent security, but there's room for improvement.",
    Grade.C: "Average. Your website has some security measures, but needs significant improvements.",
    Grade.D: "Below average. Your website has several security issues that should be addressed.",
    Grade.E: "Poor. Your website has major security vulnerabilities that need immediate attention.",
    Grade.F: "Critical. Your website has severe security issues that must be fixed as soon as possible.",
})
DEFAULT_GRADE_DESCRIPTION = "Your website's security needs to be evaluated."

# Brand colors per grade
GRADE_COLORS = MappingProxyType({
    Grade.A_PLUS: "#27ae60",
    Grade.A: "#2ecc71",
    Grade.B: "#3498db",
    Grade.C: "#f1c40f",
    Grade.D: "#e67e22",
    Grade.E: "#e74c3c",
    Grade.F: "#c0392b",
})
DEFAULT_GRADE_COLOR = "#646464"

PRIORITY_COLORS = MappingProxyType({
    Priority.HIGH: "#ef4444",
    Priority.MEDIUM: "#f59e0b",
    Priority.LOW: "#3b82f6",
})

HEADER_DESCRIPTIONS = MappingProxyType({
    "strict-transport-security": "Forces browsers to use HTTPS for your site",
    "content-security-policy": "Controls which resources can be loaded",
    "x-content-type-options": "Prevents MIME type sniffing",
    "x-frame-options": "Controls if your site can be embedded in iframes",
    "x-xss-protection": "Helps prevent cross-site scripting attacks",
    "referrer-policy": "Controls what information is sent in the Referer header",
    "permissions-policy": "Controls which browser features can be used",
})
DEFAULT_HEADER_DESCRIPTION = "Security header for your website"

SSL_CHECK_DESCRIPTIONS = MappingProxyType({
    "validCertificate": "Certificate is properly signed and not expired",
    "strongCiphers": "Uses strong encryption algorithms",
    "secureProtocols": "Uses TLS 1.2 or higher",
    "certChainValid": "Certificate chain is properly configured",
})
DEFAULT_SSL_CHECK_DESCRIPTION = "SSL/TLS security check"

# Shown after the recommendations in both the HTML view and the PDF.
NEXT_STEPS = (
    'Address any "High" priority recommendations as soon as possible',
    'Create a plan to implement "Medium" priority recommendations',
    "Re-scan your website after making changes to verify improvements",
    "Schedule regular security scans to catch new issues early",
)


def grade_description(grade) -> str:
    return GRADE_DESCRIPTIONS.get(parse_grade(grade), DEFAULT_GRADE_DESCRIPTION)


def grade_color(grade) -> str:
    return GRADE_COLORS.get(parse_grade(grade), DEFAULT_GRADE_COLOR)


def priority_color(priority) -> str:
    try:
        return PRIORITY_COLORS[Priority(priority)]
    except ValueError:
        return "#6b7280"


def header_description(header: str) -> str:
    return HEADER_DESCRIPTIONS.get(header.lower(), DEFAULT_HEADER_DESCRIPTION)


def ssl_check_description(check: str) -> str:
    return SSL_CHECK_DESCRIPTIONS.get(check, DEFAULT_SSL_CHECK_DESCRIPTION)


def format_header_name(header: str) -> str:
    """'x-frame-options' -> 'X-Frame-Options'."""
    return "-".join(word[:1].upper() + word[1:] for word in header.split("-"))


def format_check_name(check: str) -> str:
    """'validCertificate' -> 'Valid Certificate'."""
    words = re.sub(r"([A-Z])", r" \1", check).split()
    return " ".join(w[:1].upper() + w[1:] for w in words)


def headers_summary(result: AssessmentResult) -> str:
    if not result.observations:
        return "No header data available"
    if result.passed == result.total:
        return "All security headers are properly configured"
    if result.passed == 0:
        return "No security headers are configured"
    return f"{result.passed} of {result.total} security headers are configured"


def ssl_summary(result: AssessmentResult) -> str:
    if not result.observations:
        return "No SSL data available"
    if result.passed == result.total:
        return "SSL is properly configured"
    if result.passed == 0:
        return "SSL has critical issues"
    return f"{result.passed} of {result.total} SSL checks passed"


def report_filename(url: str) -> str:
    return f"security-report-{re.sub(r'[^a-zA-Z0-9]', '-', url)}.pdf"
