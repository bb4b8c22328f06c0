from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import HTMLResponse, Response

from api.reports import pdf_response
from dependencies import get_report_requester, get_workflow_registry
from schemas.workflow import WorkflowState
from services.report_requester import ReportRequester
from services.workflow import SubmissionWorkflow, WorkflowRegistry

router = APIRouter(prefix="/api/workflows", tags=["workflows"])


def _get_workflow(workflow_id: str, registry: WorkflowRegistry) -> SubmissionWorkflow:
    try:
        return registry.get(workflow_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Workflow not found")


def _require_viewing(workflow: SubmissionWorkflow) -> str:
    if workflow.state is not WorkflowState.VIEWING or workflow.report is None:
        raise HTTPException(status_code=409, detail=f"No report to show (state: {workflow.state.value})")
    return workflow.report


@router.post("", status_code=201)
async def create_workflow(
    registry: WorkflowRegistry = Depends(get_workflow_registry),
    requester: ReportRequester = Depends(get_report_requester),
):
    workflow = registry.create(requester)
    return workflow.snapshot().model_dump(by_alias=True)


@router.get("/{workflow_id}")
async def get_workflow(workflow_id: str, registry: WorkflowRegistry = Depends(get_workflow_registry)):
    return _get_workflow(workflow_id, registry).snapshot().model_dump(by_alias=True)


@router.post("/{workflow_id}/submit")
async def submit_workflow(
    workflow_id: str,
    body: Any = Body(...),
    registry: WorkflowRegistry = Depends(get_workflow_registry),
):
    workflow = _get_workflow(workflow_id, registry)
    snapshot = await workflow.submit(body)
    return snapshot.model_dump(by_alias=True)


@router.post("/{workflow_id}/back")
async def back_to_form(workflow_id: str, registry: WorkflowRegistry = Depends(get_workflow_registry)):
    return _get_workflow(workflow_id, registry).back().model_dump(by_alias=True)


@router.get("/{workflow_id}/report", response_class=HTMLResponse)
async def get_report_html(workflow_id: str, registry: WorkflowRegistry = Depends(get_workflow_registry)):
    workflow = _get_workflow(workflow_id, registry)
    _require_viewing(workflow)
    return HTMLResponse(workflow.snapshot().report_html or "")


@router.get("/{workflow_id}/report.pdf")
async def get_report_pdf(workflow_id: str, registry: WorkflowRegistry = Depends(get_workflow_registry)):
    workflow = _get_workflow(workflow_id, registry)
    _require_viewing(workflow)
    return pdf_response(workflow.cleaned_report or "")


@router.delete("/{workflow_id}", status_code=204)
async def delete_workflow(workflow_id: str, registry: WorkflowRegistry = Depends(get_workflow_registry)):
    _get_workflow(workflow_id, registry)
    registry.discard(workflow_id)
    return Response(status_code=204)
