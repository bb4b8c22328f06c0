"""
Submission workflow for the loan application page.

    editing --submit(valid)--> submitting --success--> viewing(report)
                                          --failure--> editing (notice, fields cleared)
    viewing --back--> editing (report and fields cleared)

Invalid submissions stay in editing with per-field errors. Only one request may
be in flight: submit is ignored unless the workflow is editing.
"""
from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Mapping, Optional

from config import Settings
from schemas.report import ReportSuccess
from schemas.workflow import WorkflowSnapshot, WorkflowState
from services.report_renderer import render_report_html
from services.report_requester import ReportRequester
from services.sanitizer import strip_html_tags
from services.validation import validate_application

logger = logging.getLogger(__name__)

REPORT_FAILED_NOTICE = "Error in generating report. Please try again."
SUBMIT_FAILED_NOTICE = "Failed to submit form. Please try again."


class SubmissionWorkflow:
    def __init__(
        self,
        requester: ReportRequester,
        *,
        workflow_id: Optional[str] = None,
        bounded: Optional[bool] = None,
        settings: Optional[Settings] = None,
    ):
        self.id = workflow_id
        self._requester = requester
        self._bounded = bounded
        self._settings = settings
        self.state = WorkflowState.EDITING
        self.values: dict[str, Any] = {}
        self.errors: dict[str, str] = {}
        self.notice: Optional[str] = None
        self.report: Optional[str] = None

    def _transition(self, state: WorkflowState) -> None:
        logger.debug("Workflow %s: %s -> %s", self.id, self.state.value, state.value)
        self.state = state

    def _reset_fields(self) -> None:
        self.values = {}
        self.errors = {}

    async def submit(self, data: Any) -> WorkflowSnapshot:
        if self.state is not WorkflowState.EDITING:
            logger.info("Ignoring submit for workflow %s while %s", self.id, self.state.value)
            return self.snapshot()

        self.values = dict(data) if isinstance(data, Mapping) else {}
        self.notice = None
        result = validate_application(data, bounded=self._bounded, settings=self._settings)
        if not result.is_valid:
            self.errors = result.errors
            return self.snapshot()

        self.errors = {}
        self._transition(WorkflowState.SUBMITTING)
        try:
            outcome = await asyncio.to_thread(self._requester.request_report, result.record)
        except Exception:
            logger.exception("Report submission failed for workflow %s", self.id)
            self._reset_fields()
            self.notice = SUBMIT_FAILED_NOTICE
            self._transition(WorkflowState.EDITING)
            return self.snapshot()

        self._reset_fields()
        if isinstance(outcome, ReportSuccess):
            self.report = outcome.text
            self._transition(WorkflowState.VIEWING)
        else:
            logger.warning("Report request failed for workflow %s: %s", self.id, outcome.message)
            self.notice = REPORT_FAILED_NOTICE
            self._transition(WorkflowState.EDITING)
        return self.snapshot()

    def back(self) -> WorkflowSnapshot:
        if self.state is WorkflowState.SUBMITTING:
            logger.info("Ignoring back for workflow %s while a report is in flight", self.id)
            return self.snapshot()
        self.report = None
        self.notice = None
        self._reset_fields()
        self._transition(WorkflowState.EDITING)
        return self.snapshot()

    @property
    def cleaned_report(self) -> Optional[str]:
        if self.report is None:
            return None
        return strip_html_tags(self.report)

    def snapshot(self) -> WorkflowSnapshot:
        viewing = self.state is WorkflowState.VIEWING
        return WorkflowSnapshot(
            id=self.id,
            state=self.state,
            values=dict(self.values),
            errors=dict(self.errors),
            notice=self.notice,
            report=self.report if viewing else None,
            report_html=render_report_html(self.report) if viewing else None,
            cleaned_report=self.cleaned_report if viewing else None,
        )


class WorkflowRegistry:
    """
    In-memory workflows keyed by session id. Past `max_sessions` the least
    recently used workflow is evicted; workflows with a request in flight are
    never evicted.
    """

    def __init__(self, max_sessions: int = 256):
        self.max_sessions = max_sessions
        self._workflows: dict[str, SubmissionWorkflow] = {}

    def __len__(self) -> int:
        return len(self._workflows)

    def _evict(self) -> None:
        for workflow_id, workflow in self._workflows.items():
            if workflow.state is not WorkflowState.SUBMITTING:
                del self._workflows[workflow_id]
                logger.info("Evicted workflow %s", workflow_id)
                return
        logger.warning("All %d workflows are submitting; none evicted", len(self._workflows))

    def create(self, requester: ReportRequester, **kwargs: Any) -> SubmissionWorkflow:
        if len(self._workflows) >= self.max_sessions:
            self._evict()
        workflow_id = uuid.uuid4().hex
        workflow = SubmissionWorkflow(requester, workflow_id=workflow_id, **kwargs)
        self._workflows[workflow_id] = workflow
        return workflow

    def get(self, workflow_id: str) -> SubmissionWorkflow:
        """Raises KeyError for unknown ids. Marks the workflow as recently used."""
        workflow = self._workflows.pop(workflow_id)
        self._workflows[workflow_id] = workflow
        return workflow

    def discard(self, workflow_id: str) -> None:
        self._workflows.pop(workflow_id, None)
