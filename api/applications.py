from typing import Any

from fastapi import APIRouter, Body

from services.validation import validate_application

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.post("/validate")
async def validate(body: Any = Body(...)):
    """Check a form payload without requesting a report."""
    result = validate_application(body)
    return {"valid": result.is_valid, "errors": result.errors}
