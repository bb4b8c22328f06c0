from functools import lru_cache

from config import settings
from services.report_requester import ReportRequester
from services.workflow import WorkflowRegistry

_registry = WorkflowRegistry()


@lru_cache(maxsize=1)
def get_report_requester() -> ReportRequester:
    """Shared requester; the OpenAI client is created on first use."""
    return ReportRequester(settings=settings)


def get_workflow_registry() -> WorkflowRegistry:
    return _registry
