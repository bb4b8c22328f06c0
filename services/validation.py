"""
Validates a submitted form payload against ApplicationRecord.
Every field is checked in one pass; the result carries either the accepted record
or a camelCase field -> message mapping suitable for inline display.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from config import Settings, settings as default_settings
from schemas.application import REQUIRED_MESSAGES, ApplicationRecord, field_alias

logger = logging.getLogger(__name__)

ROOT_ERROR_KEY = "__root__"


@dataclass(frozen=True)
class ValidationResult:
    record: Optional[ApplicationRecord] = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return self.record is not None


def validate_application(
    data: Any,
    *,
    bounded: Optional[bool] = None,
    settings: Optional[Settings] = None,
) -> ValidationResult:
    """
    Validate a raw form payload. Never raises for bad input.
    `bounded` overrides Settings.enforce_amount_bounds when given.
    """
    cfg = settings or default_settings
    if not isinstance(data, Mapping):
        return ValidationResult(errors={ROOT_ERROR_KEY: "Application data must be an object"})

    use_bounds = cfg.enforce_amount_bounds if bounded is None else bounded
    context = {"amount_bounds": cfg.amount_bounds} if use_bounds else {}
    try:
        record = ApplicationRecord.model_validate(dict(data), context=context)
    except ValidationError as exc:
        errors = _errors_by_field(exc)
        logger.debug("Application rejected: %s", sorted(errors))
        return ValidationResult(errors=errors)
    return ValidationResult(record=record)


def _errors_by_field(exc: ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for err in exc.errors():
        loc = err.get("loc") or ()
        key = str(loc[0]) if loc else ROOT_ERROR_KEY
        if key in REQUIRED_MESSAGES:
            # Reported under the attribute name when populated by name
            key = field_alias(key)
        name = _attribute_name(key)
        if err.get("type") == "missing" and name is not None:
            message = REQUIRED_MESSAGES[name]
        else:
            message = err.get("msg") or "Invalid value"
        # First message per field wins
        errors.setdefault(key, message)
    return errors


_ALIAS_TO_NAME = {field_alias(name): name for name in REQUIRED_MESSAGES}


def _attribute_name(alias: str) -> Optional[str]:
    return _ALIAS_TO_NAME.get(alias)
