from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class WorkflowState(str, Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"
    VIEWING = "viewing"


class WorkflowSnapshot(BaseModel):
    id: Optional[str] = None
    state: WorkflowState
    values: dict[str, Any] = Field(default_factory=dict)
    errors: dict[str, str] = Field(default_factory=dict)
    notice: Optional[str] = None
    report: Optional[str] = None
    report_html: Optional[str] = None
    cleaned_report: Optional[str] = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
