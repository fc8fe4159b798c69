"""
AI audit of a period's report records.

Turns a record subset into a prompt for the text generation port and always
answers with text: failures map to fixed advisory strings.
"""
import asyncio
import json
import logging
from typing import List, Sequence

from ...domain.entities.report_record import ReportRecord
from ...domain.ports.text_generation_port import TextGenerationPort
from ...shared.exceptions import BusinessRuleViolationException, ExternalApiException

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS_MESSAGE = "AI Service Unavailable: Missing API Key."
SERVICE_FAILURE_MESSAGE = "Failed to generate AI audit report. Please try again later."
EMPTY_RESPONSE_MESSAGE = "No analysis generated."

AUDIT_PROMPT_TEMPLATE = """
You are an AI Auditor for an Oil & Gas company.
Review the following operational data for the selected period and generate a formal Audit Report.

Data Provided (JSON):
{data}

REQUIREMENTS:
1. **Oil Production**: Summarize total production. Identify trends (rising/falling).
2. **Safety Report**: Answer "How many employees were affected by an accident?". List specific dates and Wells if any accidents occurred.
3. **Weather Impact**: Answer "How was the weather?". Analyze if weather (e.g., Stormy, Windy) had any correlation with lower production or accidents.
4. **Conclusion**: Is the operation efficient and safe?

Keep the tone professional and factual. Use Markdown formatting.
"""


def project_record(record: ReportRecord) -> dict:
    """Compact view of a record sent to the model."""
    return {
        "date": record.date.isoformat(),
        "field": record.field_name,
        "well": record.well_id,
        "oil": record.oil_produced_bbl,
        "employeesAffected": record.employees_affected,
        "weather": record.weather_condition.value,
    }


def build_audit_prompt(records: Sequence[ReportRecord]) -> str:
    data = json.dumps([project_record(r) for r in records])
    return AUDIT_PROMPT_TEMPLATE.format(data=data)


class AuditService:
    """
    Requests AI audits through a swappable text generation adapter.
    Only one audit may be pending at a time.
    """

    def __init__(self, text_generator: TextGenerationPort):
        self.text_generator = text_generator
        self._in_flight = asyncio.Lock()

    @property
    def is_busy(self) -> bool:
        return self._in_flight.locked()

    async def request_audit(self, records: Sequence[ReportRecord]) -> str:
        """
        Generate an audit report for the records.

        Returns the model's text verbatim, or a fixed advisory string when the
        credential is missing, the service fails, or the answer is empty.

        Raises:
            BusinessRuleViolationException: When another audit is still pending
        """
        if self.is_busy:
            raise BusinessRuleViolationException(
                message="An audit is already in progress. Please wait for it to complete.",
                rule="SINGLE_AUDIT_RULE"
            )

        async with self._in_flight:
            return await self._generate(list(records))

    async def _generate(self, records: List[ReportRecord]) -> str:
        if not self.text_generator.is_configured:
            logger.error("Text generation credentials are missing; audit not requested")
            return MISSING_CREDENTIALS_MESSAGE

        prompt = build_audit_prompt(records)
        logger.info(f"Requesting audit for {len(records)} reports")

        try:
            text = await self.text_generator.generate(prompt)
        except ExternalApiException as e:
            logger.error(f"Audit generation failed: {e.message}")
            return SERVICE_FAILURE_MESSAGE
        except Exception as e:
            logger.error(f"Unexpected error during audit generation: {str(e)}", exc_info=True)
            return SERVICE_FAILURE_MESSAGE

        if not text or not text.strip():
            logger.warning("Audit generation returned an empty response")
            return EMPTY_RESPONSE_MESSAGE
        return text
