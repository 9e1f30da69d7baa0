import pytest

from grading import assess_headers, assess_ssl
from lookups import (
    GRADE_COLORS,
    format_check_name,
    format_header_name,
    grade_color,
    grade_description,
    header_description,
    headers_summary,
    priority_color,
    report_filename,
    ssl_check_description,
    ssl_summary,
)
from models import GRADE_ORDER, HEADER_NAMES, Grade


def test_every_grade_has_description_and_color():
    for grade in GRADE_ORDER:
        assert grade_description(grade) != grade_description("unknown")
        assert grade_color(grade).startswith("#")


def test_lookups_accept_plain_strings():
    assert grade_description("A+") == grade_description(Grade.A_PLUS)
    assert grade_color("F") == GRADE_COLORS[Grade.F]
    assert priority_color("High") == "#ef4444"
    assert priority_color("Urgent") == "#6b7280"


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        GRADE_COLORS[Grade.A] = "#000000"


def test_header_descriptions():
    assert header_description("Strict-Transport-Security") == "Forces browsers to use HTTPS for your site"
    assert header_description("x-unknown") == "Security header for your website"
    assert ssl_check_description("secureProtocols") == "Uses TLS 1.2 or higher"
    assert ssl_check_description("other") == "SSL/TLS security check"


def test_name_formatting():
    assert format_header_name("x-content-type-options") == "X-Content-Type-Options"
    assert format_check_name("validCertificate") == "Valid Certificate"
    assert format_check_name("certChainValid") == "Cert Chain Valid"


def test_headers_summary():
    assert headers_summary(assess_headers({n: True for n in HEADER_NAMES})) == \
        "All security headers are properly configured"
    assert headers_summary(assess_headers({})) == "No security headers are configured"
    assert headers_summary(assess_headers({"referrer-policy": True})) == \
        "1 of 6 security headers are configured"


def test_ssl_summary():
    assert ssl_summary(assess_ssl({})) == "SSL has critical issues"
    assert ssl_summary(assess_ssl({"validCertificate": True, "certChainValid": True})) == "2 of 4 SSL checks passed"


def test_report_filename_replaces_non_alphanumerics():
    assert report_filename("https://example.com/a?b=1") == "security-report-https---example-com-a-b-1.pdf"
