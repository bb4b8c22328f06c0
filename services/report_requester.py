"""
Requests a loan risk report for a validated application from the OpenAI
chat-completions API. One call per request, no retries; the generated text is
returned verbatim (sanitizing is the caller's job).
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

import openai
from openai import OpenAI

from config import Settings, settings as default_settings
from schemas.application import ApplicationRecord
from schemas.report import ReportFailure, ReportResult, ReportSuccess

logger = logging.getLogger(__name__)

REPORT_INSTRUCTIONS = (
    "Todo: I want to create a detailed report from the given data. It should describe "
    "the company summary, current trends in its market, and whether or not it is good "
    "to give the company a loan. Also, please propose a new loan agreement that "
    "benefits both parties (if required). "
    "Dependency: Response should be in HTML format."
)


def build_report_prompt(record: ApplicationRecord) -> str:
    """Single user message: the serialized record followed by the report instructions."""
    return (
        f"Here is the basic information of the company: {json.dumps(record.to_payload())}. "
        f"{REPORT_INSTRUCTIONS}"
    )


class ReportRequester:
    """
    Thin wrapper over the OpenAI client. Pass `client` to inject a preconfigured
    (or fake) client; otherwise one is built lazily from Settings.
    """

    def __init__(
        self,
        client: Any = None,
        *,
        model: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or default_settings
        self._client = client
        self.model = model or self._settings.openai_model

    def _get_client(self) -> Any:
        if self._client is None:
            api_key = self._settings.openai_api_key
            if not api_key:
                return None
            self._client = OpenAI(
                api_key=api_key,
                base_url=self._settings.openai_base_url,
                max_retries=0,
            )
        return self._client

    def request_report(self, record: ApplicationRecord) -> ReportResult:
        client = self._get_client()
        if client is None:
            logger.error("OPENAI_API_KEY is not set; cannot request report")
            return ReportFailure(message="Report provider is not configured")

        logger.info("Requesting loan report for %r (model=%s)", record.company_name, self.model)
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": build_report_prompt(record)}],
            )
        except openai.APIStatusError as e:
            logger.warning("Report provider returned HTTP %s: %s", e.status_code, e.body)
            return ReportFailure(
                message="Report provider returned an error",
                status_code=e.status_code,
                payload=e.body,
            )
        except openai.APIResponseValidationError as e:
            logger.warning("Report provider sent an unreadable response: %s", e)
            return ReportFailure(
                message="Malformed response from report provider",
                status_code=e.status_code,
                payload=e.body,
            )
        except openai.APIConnectionError as e:
            logger.warning("Could not reach report provider: %s", e)
            return ReportFailure(message=f"Could not reach report provider: {e}")

        return _extract_report(response)


def _extract_report(response: Any) -> ReportResult:
    """First choice's message content, checked field by field."""
    choices = getattr(response, "choices", None)
    if not choices:
        logger.warning("Report provider response has no choices")
        return ReportFailure(message="Malformed response from report provider")
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if not isinstance(content, str) or not content:
        logger.warning("Report provider response has no message content")
        return ReportFailure(message="Malformed response from report provider")
    return ReportSuccess(text=content)
