import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import Response

from dependencies import get_report_requester
from schemas.report import ReportFailure, ReportPdfRequest, ReportResponse
from services.report_renderer import REPORT_PDF_FILENAME, render_report_html, render_report_pdf
from services.report_requester import ReportRequester
from services.sanitizer import strip_html_tags
from services.validation import validate_application

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["reports"])


def pdf_response(cleaned_report: str) -> Response:
    return Response(
        content=render_report_pdf(cleaned_report),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{REPORT_PDF_FILENAME}"'},
    )


@router.post("", response_model=dict)
def create_report(
    body: Any = Body(...),
    requester: ReportRequester = Depends(get_report_requester),
):
    """Validate the application and generate its report in one call."""
    result = validate_application(body)
    if not result.is_valid:
        raise HTTPException(status_code=422, detail={"errors": result.errors})
    try:
        outcome = requester.request_report(result.record)
    except Exception:
        logger.exception("Report request failed for %r", result.record.company_name)
        outcome = ReportFailure(message="Report request failed")
    if isinstance(outcome, ReportFailure):
        raise HTTPException(status_code=502, detail=outcome.model_dump(by_alias=True))
    return ReportResponse(
        report=outcome.text,
        report_html=render_report_html(outcome.text),
        cleaned_report=strip_html_tags(outcome.text),
    ).model_dump(by_alias=True)


@router.post("/pdf")
def download_report_pdf(body: ReportPdfRequest):
    return pdf_response(strip_html_tags(body.report))
