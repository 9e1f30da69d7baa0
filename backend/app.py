"""Security Scorecard - FastAPI backend grading security headers and SSL/TLS configuration."""

import logging

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel, field_validator

import settings
from errors import InvalidInput, ScanSourceError, ScanTimeout
from lookups import report_filename
from models import SecurityReport
from report_generator import generate_pdf
from report_html import generate_report_html
from scanner import assess_url_headers, assess_url_ssl, run_scan, validate_target_url
from sources import ScanDataSource, get_data_source

settings.configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Security Scorecard API",
    description="Grades HTTP security headers and SSL/TLS configuration and exports PDF reports.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_source() -> ScanDataSource:
    return get_data_source(settings.DATA_SOURCE)


class ScanRequest(BaseModel):
    url: str

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        try:
            return validate_target_url(v)
        except InvalidInput as e:
            raise ValueError(str(e))


def _checked_url(url) -> str:
    try:
        return validate_target_url(url)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))


async def _scan(url: str, source: ScanDataSource) -> SecurityReport:
    try:
        return await run_scan(url, source)
    except ScanTimeout:
        raise HTTPException(status_code=504, detail="Target site did not respond in time.")
    except ScanSourceError as e:
        raise HTTPException(status_code=502, detail=str(e))


def _pdf_response(report: SecurityReport) -> Response:
    return Response(
        content=generate_pdf(report),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{report_filename(report.url)}"'},
    )


@app.post("/scan", response_model=SecurityReport)
async def scan(request: ScanRequest, source: ScanDataSource = Depends(get_source)):
    return await _scan(request.url, source)


@app.get("/api/security-headers")
async def security_headers(url: str = Query(""), source: ScanDataSource = Depends(get_source)):
    url = _checked_url(url)
    try:
        result = await assess_url_headers(url, source)
    except ScanSourceError:
        logger.exception("Error fetching security headers for %s", url)
        raise HTTPException(status_code=500, detail="Failed to fetch security headers")
    return {"grade": result.grade.value, "headers": result.observations, "score": result.score}


@app.get("/api/ssl-check")
async def ssl_check(url: str = Query(""), source: ScanDataSource = Depends(get_source)):
    url = _checked_url(url)
    try:
        result = await assess_url_ssl(url, source)
    except ScanSourceError:
        logger.exception("Error fetching SSL status for %s", url)
        raise HTTPException(status_code=500, detail="Failed to fetch SSL status")
    return {"grade": result.grade.value, "details": result.observations, "score": result.score}


@app.get("/results", response_class=HTMLResponse)
async def results(url: str = Query(""), source: ScanDataSource = Depends(get_source)):
    """Interactive results page for a fresh scan."""
    report = await _scan(_checked_url(url), source)
    return HTMLResponse(content=generate_report_html(report))


@app.post("/api/pdf")
async def export_pdf(report: SecurityReport):
    """Render an already computed report as a PDF download."""
    if not report.url.strip():
        raise HTTPException(status_code=400, detail="Invalid data")
    return _pdf_response(report)


@app.post("/report/pdf")
async def report_pdf(request: ScanRequest, source: ScanDataSource = Depends(get_source)):
    """Scan the URL and return its PDF report."""
    return _pdf_response(await _scan(request.url, source))


@app.get("/")
async def root():
    return {"status": "ok", "service": "Security Scorecard API", "version": "1.0.0"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
