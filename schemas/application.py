from __future__ import annotations

import math
from typing import Any, Optional, Union

from pydantic import BaseModel, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

Number = Union[int, float]

# Required-field messages, keyed by attribute name
TEXT_FIELDS: dict[str, str] = {
    # Company information
    "company_name": "Company Name is required",
    "business_structure": "Business Structure is required",
    "industry": "Industry is required",
    "location": "Location is required",
    "contact_info": "Contact Information is required",
    # Financial information
    "assets": "Assets are required",
    "liabilities": "Liabilities are required",
    "bank_accounts": "Current Bank Accounts are required",
    # Ownership and management
    "owner_info": "Owner Information is required",
    "management_team": "Management Team is required",
    # Loan information
    "loan_purpose": "Purpose of Loan is required",
    "repayment_plan": "Repayment Plan is required",
    # Business operations
    "key_customers": "Key Customers are required",
    # Compliance and legal
    "licenses": "Licenses and Permits are required",
    "legal_issues": "Legal Issues is required",
    # Additional information
    "financial_projections": "Financial Projections are required",
    "business_plan": "Business Plan is required",
    "references": "References are required",
}

NUMBER_FIELDS: dict[str, str] = {
    "business_revenue": "Business Revenue is required.",
    "net_profit": "Net Profit is required.",
    "loan_amount": "Loan Amount is required.",
    "years_in_business": "Years In Business is required.",
    "number_of_employees": "Number Of Employees is required.",
}

# Subject to the optional amount bounds
BOUNDED_FIELDS = ("business_revenue", "net_profit", "loan_amount")

NUMBER_TYPE_MESSAGE = "Amount must be a number"
NUMBER_RANGE_MESSAGE = "Amount must be between {low} and {high}"

REQUIRED_MESSAGES: dict[str, str] = {**TEXT_FIELDS, **NUMBER_FIELDS}


def _coerce_number(value: Any) -> Optional[Number]:
    """Parse a form value as a finite number; None when it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def format_amount(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


class ApplicationRecord(BaseModel):
    """One loan application as submitted from the intake form.

    Wire names are camelCase (``companyName``); attributes are snake_case.
    Pass ``context={"amount_bounds": (low, high)}`` to ``model_validate`` to
    enable the bounded variant for revenue, net profit and loan amount.
    """

    # Company information
    company_name: str
    business_structure: str
    industry: str
    location: str
    contact_info: str

    # Financial information
    business_revenue: Number
    net_profit: Number
    assets: str
    liabilities: str
    bank_accounts: str

    # Ownership and management
    owner_info: str
    management_team: str

    # Loan information
    loan_amount: Number
    loan_purpose: str
    repayment_plan: str

    # Business operations
    years_in_business: Number
    number_of_employees: Number
    key_customers: str

    # Compliance and legal
    licenses: str
    legal_issues: str

    # Additional information
    financial_projections: str
    business_plan: str
    references: str

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def _require_text(cls, value: Any, info: ValidationInfo) -> str:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("required", TEXT_FIELDS[info.field_name])
        return value.strip()

    @field_validator(*NUMBER_FIELDS, mode="before")
    @classmethod
    def _require_number(cls, value: Any, info: ValidationInfo) -> Number:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise PydanticCustomError("required", NUMBER_FIELDS[info.field_name])
        number = _coerce_number(value)
        if number is None:
            raise PydanticCustomError("number_type", NUMBER_TYPE_MESSAGE)
        bounds = (info.context or {}).get("amount_bounds")
        if bounds is not None and info.field_name in BOUNDED_FIELDS:
            low, high = bounds
            if not low <= number <= high:
                raise PydanticCustomError(
                    "number_range",
                    NUMBER_RANGE_MESSAGE,
                    {"low": format_amount(low), "high": format_amount(high)},
                )
        return number

    def to_payload(self) -> dict[str, Any]:
        """camelCase dict, the shape embedded in the report prompt."""
        return self.model_dump(by_alias=True)


def field_alias(name: str) -> str:
    return to_camel(name)
