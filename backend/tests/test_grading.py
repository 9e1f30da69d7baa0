import itertools

import pytest

from grading import (
    CANONICAL_SCHEME,
    REPORT_SCHEME,
    RESULTS_PAGE_SCHEME,
    aggregate,
    assess_headers,
    assess_ssl,
    grade_to_score,
    normalize,
    weighted_score,
)
from models import GRADE_ORDER, HEADER_NAMES, SSL_CHECKS, Grade


def _headers(missing=()):
    return {name: name not in missing for name in HEADER_NAMES}


def _ssl(failed=()):
    return {check: check not in failed for check in SSL_CHECKS}


def test_normalize_adds_scheme_when_missing():
    assert normalize("example.com") == "example.com"
    assert normalize("https://example.com") == "example.com"


def test_normalize_strips_port_path_and_case():
    assert normalize("http://Example.COM:8443/login?next=/") == "example.com"


def test_normalize_passes_unparseable_input_through():
    assert normalize("http://[::1") == "http://[::1"
    assert normalize("") == ""


def test_all_headers_present_is_a_plus():
    result = assess_headers(_headers())
    assert result.grade == Grade.A_PLUS
    assert result.score == 100


def test_no_headers_present_is_f():
    result = assess_headers({name: False for name in HEADER_NAMES})
    assert result.grade == Grade.F
    assert result.score == 0


def test_missing_hsts_only_is_a():
    result = assess_headers(_headers(missing=("strict-transport-security",)))
    assert result.grade == Grade.A
    assert result.score == pytest.approx(83.33, abs=0.01)


@pytest.mark.parametrize("present,grade", [
    (6, Grade.A_PLUS),
    (5, Grade.A),
    (4, Grade.C),  # 66.67% falls under the 67% bound
    (3, Grade.C),
    (2, Grade.D),
    (1, Grade.F),  # 16.67% falls under the 17% bound
    (0, Grade.F),
])
def test_header_grade_buckets(present, grade):
    observations = {name: i < present for i, name in enumerate(HEADER_NAMES)}
    assert assess_headers(observations).grade == grade


def test_absent_header_keys_count_as_missing():
    result = assess_headers({"strict-transport-security": True, "content-security-policy": True})
    assert result.observations["x-frame-options"] is False
    assert list(result.observations) == list(HEADER_NAMES)
    assert result.grade == Grade.D


def test_header_keys_are_case_insensitive_and_extras_ignored():
    observations = {name.upper(): True for name in HEADER_NAMES}
    observations["x-powered-by"] = True
    result = assess_headers(observations)
    assert result.grade == Grade.A_PLUS
    assert "x-powered-by" not in result.observations


def test_missing_observation_set_is_f():
    assert assess_headers(None).grade == Grade.F
    assert assess_ssl({}).grade == Grade.F


@pytest.mark.parametrize("passed,grade", [
    (4, Grade.A_PLUS),
    (3, Grade.A),
    (2, Grade.B),
    (1, Grade.C),
    (0, Grade.F),
])
def test_ssl_grade_buckets(passed, grade):
    observations = {check: i < passed for i, check in enumerate(SSL_CHECKS)}
    assert assess_ssl(observations).grade == grade


def test_two_of_four_ssl_checks_is_b():
    result = assess_ssl(_ssl(failed=("strongCiphers", "secureProtocols")))
    assert result.score == 50
    assert result.grade == Grade.B


def test_assessment_result_is_immutable():
    result = assess_ssl(_ssl())
    with pytest.raises(Exception):
        result.grade = Grade.F


def test_grade_to_score_lookup_and_unknown():
    assert grade_to_score(Grade.A_PLUS) == 100
    assert grade_to_score("B") == 85
    assert grade_to_score(Grade.F) == 45
    assert grade_to_score("Z") == 0
    assert grade_to_score(None) == 0


def test_canonical_scheme_is_report_scheme():
    assert CANONICAL_SCHEME is REPORT_SCHEME


@pytest.mark.parametrize("scheme", [REPORT_SCHEME, RESULTS_PAGE_SCHEME])
def test_top_grades_aggregate_to_a_plus(scheme):
    assert aggregate(Grade.A_PLUS, Grade.A_PLUS, scheme) == Grade.A_PLUS


def test_report_scheme_values():
    assert weighted_score(Grade.A, Grade.B) == 89
    assert aggregate(Grade.A, Grade.B) == Grade.A
    assert aggregate(Grade.C, Grade.A_PLUS) == Grade.A
    # F maps to 45, which still clears the E bound under this scheme
    assert aggregate(Grade.F, Grade.F) == Grade.E


def test_results_page_scheme_rounds_half_up():
    # 95 * 0.45 + 85 * 0.55 = 89.5
    assert weighted_score(Grade.A, Grade.B, RESULTS_PAGE_SCHEME) == 90
    assert aggregate(Grade.A, Grade.B, RESULTS_PAGE_SCHEME) == Grade.A
    assert aggregate(Grade.F, Grade.F, RESULTS_PAGE_SCHEME) == Grade.F


def test_unknown_grades_score_zero():
    assert weighted_score("garbage", "garbage") == 0
    assert aggregate("garbage", "garbage") == Grade.F
    assert weighted_score("garbage", Grade.A_PLUS) == 60
    assert aggregate("garbage", Grade.A_PLUS) == Grade.D


@pytest.mark.parametrize("scheme", [REPORT_SCHEME, RESULTS_PAGE_SCHEME])
def test_aggregate_is_monotonic(scheme):
    for fixed in GRADE_ORDER:
        for better, worse in itertools.combinations(GRADE_ORDER, 2):
            assert aggregate(better, fixed, scheme).rank <= aggregate(worse, fixed, scheme).rank
            assert aggregate(fixed, better, scheme).rank <= aggregate(fixed, worse, scheme).rank
