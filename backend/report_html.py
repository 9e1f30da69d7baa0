"""HTML results view for a SecurityReport."""

import html
import logging

from lookups import (
    format_check_name,
    format_header_name,
    grade_color,
    grade_description,
    header_description,
    headers_summary,
    NEXT_STEPS,
    priority_color,
    ssl_check_description,
    ssl_summary,
)
from models import AssessmentResult, SecurityReport

logger = logging.getLogger(__name__)


def _esc(text) -> str:
    return html.escape(str(text))


def _score_card(title: str, grade: str, score: float, summary: str, rows_html: str) -> str:
    color = grade_color(grade)
    return f"""
  <div class="card">
    <div class="card-bar" style="background:{color}"></div>
    <div class="card-head">
      <h3>{_esc(title)}</h3>
      <span class="grade-badge" style="background:{color}">{_esc(grade)}</span>
    </div>
    <div class="progress"><div class="progress-fill" style="width:{max(0, min(score, 100)):.0f}%;background:{color}"></div></div>
    <p class="muted">{_esc(summary)}</p>
    <div class="rows">{rows_html}</div>
  </div>"""


def _observation_rows(result: AssessmentResult, name_fmt, desc_fn, ok_label: str, bad_label: str) -> str:
    rows = ""
    for key, ok in result.observations.items():
        status = "pass" if ok else "fail"
        rows += f"""
      <div class="row">
        <span class="icon {status}">{"✓" if ok else "✗"}</span>
        <div><strong>{_esc(name_fmt(key))}</strong> <span class="tag {status}">{ok_label if ok else bad_label}</span>
        <p class="muted small">{_esc(desc_fn(key))}</p></div>
      </div>"""
    return rows


def generate_report_html(report: SecurityReport) -> str:
    """Render the full results page."""
    hostname = _esc(report.hostname)
    overall = report.overall_grade.value
    overall_col = grade_color(overall)

    header_rows = _observation_rows(report.headers, format_header_name, header_description, "Present", "Missing")
    ssl_rows = _observation_rows(report.ssl, format_check_name, ssl_check_description, "Pass", "Fail")
    header_card = _score_card("Security Headers", report.headers.grade.value, report.headers.score,
                              headers_summary(report.headers), header_rows)
    ssl_card = _score_card("SSL/TLS Configuration", report.ssl.grade.value, report.ssl.score,
                           ssl_summary(report.ssl), ssl_rows)

    if report.recommendations:
        recs_html = ""
        for i, rec in enumerate(report.recommendations, 1):
            color = priority_color(rec.priority)
            recs_html += f"""
    <div class="rec">
      <div class="rec-num" style="background:{color}">{i}</div>
      <div>
        <strong>{_esc(rec.title)}</strong>
        <span class="priority" style="border-color:{color};color:{color}">{_esc(rec.priority.value)} Priority</span>
        <p class="muted">{_esc(rec.description)}</p>
      </div>
    </div>"""
    else:
        recs_html = ('<p class="good-job">Great job! No critical security issues were found. '
                     'Your website has a strong security configuration.</p>')

    steps_html = "".join(f"\n    <li>{_esc(step)}</li>" for step in NEXT_STEPS)

    logger.debug("rendering HTML report for %s", report.hostname)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Security Scorecard — {hostname}</title>
<style>
*{{margin:0;padding:0;box-sizing:border-box}}
body{{background:#f8fafc;color:#1e293b;font-family:'Segoe UI',system-ui,-apple-system,sans-serif;line-height:1.6}}
.container{{max-width:1000px;margin:0 auto;padding:32px 24px}}
header{{background:linear-gradient(135deg,#5a32ea,#ff47a6);color:#fff;border-radius:12px;padding:28px;margin-bottom:24px}}
header h1{{font-size:26px}}
header p{{opacity:.85;word-break:break-all}}
.overall{{display:flex;align-items:center;gap:24px;background:#fff;border-radius:12px;padding:24px;margin-bottom:24px;box-shadow:0 1px 3px rgba(0,0,0,.08)}}
.overall-grade{{font-size:56px;font-weight:800;color:#fff;background:{overall_col};border-radius:12px;min-width:110px;text-align:center}}
.grid{{display:grid;grid-template-columns:repeat(auto-fit,minmax(320px,1fr));gap:16px;margin-bottom:24px}}
.card{{background:#fff;border-radius:12px;overflow:hidden;box-shadow:0 1px 3px rgba(0,0,0,.08);padding:0 20px 20px}}
.card-bar{{height:8px;margin:0 -20px 16px}}
.card-head{{display:flex;justify-content:space-between;align-items:center}}
.grade-badge{{color:#fff;font-weight:700;padding:2px 12px;border-radius:6px;font-size:18px}}
.progress{{height:8px;background:#e2e8f0;border-radius:4px;overflow:hidden;margin:12px 0}}
.progress-fill{{height:100%}}
.row{{display:flex;gap:10px;padding:8px 0;border-top:1px solid #f1f5f9}}
.icon{{width:22px;height:22px;border-radius:50%;display:flex;align-items:center;justify-content:center;font-size:12px;flex-shrink:0;font-weight:700}}
.icon.pass{{background:#dcfce7;color:#16a34a}}
.icon.fail{{background:#fee2e2;color:#dc2626}}
.tag{{font-size:11px;padding:1px 8px;border-radius:10px}}
.tag.pass{{background:#dcfce7;color:#166534}}
.tag.fail{{background:#fee2e2;color:#991b1b}}
.muted{{color:#64748b}}
.small{{font-size:13px}}
section{{background:#fff;border-radius:12px;padding:24px;margin-bottom:24px;box-shadow:0 1px 3px rgba(0,0,0,.08)}}
section h2{{color:#5a32ea;margin-bottom:12px}}
.rec{{display:flex;gap:12px;padding:12px 0;border-top:1px solid #f1f5f9}}
.rec-num{{width:28px;height:28px;border-radius:50%;color:#fff;display:flex;align-items:center;justify-content:center;font-weight:700;flex-shrink:0}}
.priority{{font-size:11px;border:1px solid;border-radius:10px;padding:1px 8px;margin-left:6px}}
.good-job{{color:#16a34a;text-align:center;padding:16px}}
</style>
</head>
<body>
<div class="container">
<header>
  <h1>Security Scorecard</h1>
  <p>{_esc(report.url)} · {report.generated_at.strftime('%B %d, %Y — %H:%M UTC')}</p>
</header>

<div class="overall">
  <div class="overall-grade">{_esc(overall)}</div>
  <div>
    <h2>Overall Security Score: {report.overall_score}/100</h2>
    <p class="muted">{_esc(grade_description(overall))}</p>
  </div>
</div>

<div class="grid">{header_card}{ssl_card}
</div>

<section>
  <h2>Security Recommendations</h2>{recs_html}
</section>

<section>
  <h2>Next Steps</h2>
  <ol style="padding-left:20px">{steps_html}
  </ol>
</section>
</div>
</body>
</html>"""
