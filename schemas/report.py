from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class ReportSuccess(BaseModel):
    kind: Literal["success"] = "success"
    text: str


class ReportFailure(BaseModel):
    kind: Literal["error"] = "error"
    message: str
    status_code: Optional[int] = None
    # Provider error body, passed through as received
    payload: Optional[Any] = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


ReportResult = Annotated[Union[ReportSuccess, ReportFailure], Field(discriminator="kind")]


class ReportResponse(BaseModel):
    report: str
    report_html: str
    cleaned_report: str

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class ReportPdfRequest(BaseModel):
    report: str = Field(..., description="Raw generated report (HTML, possibly fenced)")
