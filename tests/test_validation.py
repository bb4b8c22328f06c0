"""
Tests for application validation: required fields, number parsing, optional amount bounds.
Run from project root: python -m pytest tests/test_validation.py -v
"""
import unittest

from config import Settings
from schemas.application import REQUIRED_MESSAGES
from services.validation import ROOT_ERROR_KEY, validate_application


def _base_application():
    return {
        "companyName": "Acme Ltd",
        "businessStructure": "LLC",
        "industry": "Retail",
        "location": "Austin, TX",
        "contactInfo": "jane@acme.example, +1 512 555 0100",
        "businessRevenue": 1200,
        "netProfit": "300",
        "assets": "Warehouse, inventory",
        "liabilities": "Equipment lease",
        "bankAccounts": "Chase checking",
        "ownerInfo": "Jane Doe, 100%",
        "managementTeam": "Jane Doe (CEO)",
        "loanAmount": "2500",
        "loanPurpose": "Inventory expansion",
        "repaymentPlan": "Monthly over 36 months",
        "yearsInBusiness": 6,
        "numberOfEmployees": "14",
        "keyCustomers": "Local retailers",
        "licenses": "State retail license",
        "legalIssues": "None",
        "financialProjections": "10% growth",
        "businessPlan": "Open second store",
        "references": "First National Bank",
    }


class TestValidateApplication(unittest.TestCase):
    def test_valid_application(self):
        """All fields present -> record, numbers parsed, no errors."""
        result = validate_application(_base_application(), bounded=False)
        self.assertTrue(result.is_valid)
        self.assertEqual(result.errors, {})
        record = result.record
        self.assertEqual(record.company_name, "Acme Ltd")
        self.assertEqual(record.net_profit, 300)
        self.assertIsInstance(record.loan_amount, int)
        self.assertEqual(record.number_of_employees, 14)

    def test_payload_uses_form_field_names(self):
        record = validate_application(_base_application(), bounded=False).record
        payload = record.to_payload()
        self.assertEqual(payload["companyName"], "Acme Ltd")
        self.assertEqual(payload["loanAmount"], 2500)
        self.assertEqual(len(payload), len(REQUIRED_MESSAGES))

    def test_loan_amount_not_a_number(self):
        """loanAmount 'abc' -> type error on that field only."""
        data = {**_base_application(), "loanAmount": "abc"}
        result = validate_application(data, bounded=False)
        self.assertFalse(result.is_valid)
        self.assertIsNone(result.record)
        self.assertEqual(result.errors, {"loanAmount": "Amount must be a number"})

    def test_required_and_type_errors_are_distinct(self):
        empty = validate_application({**_base_application(), "loanAmount": ""}, bounded=False)
        self.assertEqual(empty.errors["loanAmount"], "Loan Amount is required.")
        bad = validate_application({**_base_application(), "loanAmount": "12k"}, bounded=False)
        self.assertEqual(bad.errors["loanAmount"], "Amount must be a number")

    def test_all_errors_reported_at_once(self):
        """Empty payload -> one required message per field, not fail-fast."""
        result = validate_application({}, bounded=False)
        self.assertEqual(len(result.errors), len(REQUIRED_MESSAGES))
        self.assertEqual(result.errors["companyName"], "Company Name is required")
        self.assertEqual(result.errors["numberOfEmployees"], "Number Of Employees is required.")
        self.assertEqual(result.errors["references"], "References are required")

    def test_blank_text_is_required_error(self):
        data = {**_base_application(), "contactInfo": "   ", "assets": None}
        result = validate_application(data, bounded=False)
        self.assertEqual(
            result.errors,
            {"contactInfo": "Contact Information is required", "assets": "Assets are required"},
        )

    def test_text_is_trimmed(self):
        data = {**_base_application(), "companyName": "  Acme Ltd  "}
        self.assertEqual(validate_application(data, bounded=False).record.company_name, "Acme Ltd")

    def test_non_numbers_rejected(self):
        for value in [True, "nan", "inf", [1], {"v": 1}]:
            data = {**_base_application(), "netProfit": value}
            result = validate_application(data, bounded=False)
            self.assertEqual(result.errors, {"netProfit": "Amount must be a number"}, msg=repr(value))

    def test_decimal_and_negative_numbers(self):
        data = {**_base_application(), "netProfit": "-12.5", "businessRevenue": 99.75}
        record = validate_application(data, bounded=False).record
        self.assertEqual(record.net_profit, -12.5)
        self.assertEqual(record.business_revenue, 99.75)

    def test_snake_case_keys_accepted(self):
        data = {**_base_application()}
        data["company_name"] = data.pop("companyName")
        self.assertTrue(validate_application(data, bounded=False).is_valid)

    def test_not_a_mapping(self):
        result = validate_application(["companyName"], bounded=False)
        self.assertFalse(result.is_valid)
        self.assertIn(ROOT_ERROR_KEY, result.errors)


class TestAmountBounds(unittest.TestCase):
    def test_bounded_variant_rejects_out_of_range(self):
        data = {**_base_application(), "businessRevenue": 6000, "netProfit": -1}
        result = validate_application(data, bounded=True)
        self.assertEqual(
            result.errors,
            {
                "businessRevenue": "Amount must be between 0 and 5000",
                "netProfit": "Amount must be between 0 and 5000",
            },
        )

    def test_unbounded_variant_accepts_large_amounts(self):
        data = {**_base_application(), "businessRevenue": 6000, "loanAmount": 250_000}
        self.assertTrue(validate_application(data, bounded=False).is_valid)

    def test_bounds_only_apply_to_amounts(self):
        """Years in business and headcount are not bounded."""
        data = {**_base_application(), "numberOfEmployees": 9000}
        self.assertTrue(validate_application(data, bounded=True).is_valid)

    def test_bounds_boundaries_inclusive(self):
        data = {**_base_application(), "businessRevenue": 5000, "netProfit": 0}
        self.assertTrue(validate_application(data, bounded=True).is_valid)

    def test_bounds_from_settings(self):
        cfg = Settings(enforce_amount_bounds=True, amount_min=0, amount_max=1000)
        result = validate_application(_base_application(), settings=cfg)
        self.assertEqual(
            result.errors,
            {
                "businessRevenue": "Amount must be between 0 and 1000",
                "loanAmount": "Amount must be between 0 and 1000",
            },
        )

    def test_type_error_wins_over_range(self):
        data = {**_base_application(), "loanAmount": "lots"}
        result = validate_application(data, bounded=True)
        self.assertEqual(result.errors, {"loanAmount": "Amount must be a number"})


if __name__ == "__main__":
    unittest.main()
