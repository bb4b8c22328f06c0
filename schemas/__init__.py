from schemas.application import ApplicationRecord
from schemas.report import (
    ReportFailure,
    ReportPdfRequest,
    ReportResponse,
    ReportResult,
    ReportSuccess,
)
from schemas.workflow import WorkflowSnapshot, WorkflowState

__all__ = [
    "ApplicationRecord",
    "ReportFailure",
    "ReportPdfRequest",
    "ReportResponse",
    "ReportResult",
    "ReportSuccess",
    "WorkflowSnapshot",
    "WorkflowState",
]
