"""
Unit tests for the audit service.
"""

import asyncio
import json
from datetime import date

import pytest

from petrodata.application.services.audit_service import (
    EMPTY_RESPONSE_MESSAGE,
    MISSING_CREDENTIALS_MESSAGE,
    SERVICE_FAILURE_MESSAGE,
    AuditService,
    build_audit_prompt,
    project_record,
)
from petrodata.domain.entities.report_record import WeatherCondition
from petrodata.infrastructure.adapters.mock_text_generation_adapter import MockTextGenerationAdapter
from petrodata.shared.exceptions import BusinessRuleViolationException
from tests.utils.test_helpers import FakeTextGenerator, make_record, unavailable


class TestAuditPrompt:
    """Unit tests for prompt construction."""

    def test_projection_keeps_audit_fields_only(self):
        record = make_record(oil=1200, employees_affected=2, weather=WeatherCondition.WINDY)
        assert project_record(record) == {
            "date": "2024-03-01",
            "field": "East Mesa",
            "well": "W-1001",
            "oil": 1200,
            "employeesAffected": 2,
            "weather": "Windy",
        }

    def test_prompt_embeds_records_as_json(self):
        records = [make_record(well_id="W-1"), make_record(well_id="W-2", report_date=date(2024, 3, 2))]
        prompt = build_audit_prompt(records)

        assert json.dumps([project_record(r) for r in records]) in prompt
        assert "How many employees were affected by an accident?" in prompt
        assert "How was the weather?" in prompt
        assert "Markdown" in prompt

    def test_prompt_for_no_records(self):
        assert "[]" in build_audit_prompt([])


class TestAuditService:
    """Unit tests for AuditService.request_audit."""

    @pytest.mark.asyncio
    async def test_returns_model_text_verbatim(self):
        generator = FakeTextGenerator(response="## Audit\n\nProduction steady.")
        service = AuditService(text_generator=generator)

        report = await service.request_audit([make_record()])

        assert report == "## Audit\n\nProduction steady."
        assert len(generator.prompts) == 1
        assert '"well": "W-1001"' in generator.prompts[0]

    @pytest.mark.asyncio
    async def test_missing_credentials(self):
        generator = FakeTextGenerator(configured=False)
        service = AuditService(text_generator=generator)

        assert await service.request_audit([make_record()]) == MISSING_CREDENTIALS_MESSAGE
        assert generator.prompts == []

    @pytest.mark.asyncio
    async def test_service_failure(self):
        service = AuditService(text_generator=FakeTextGenerator(error=unavailable()))
        assert await service.request_audit([make_record()]) == SERVICE_FAILURE_MESSAGE

    @pytest.mark.asyncio
    async def test_unexpected_failure(self):
        service = AuditService(text_generator=FakeTextGenerator(error=RuntimeError("boom")))
        assert await service.request_audit([make_record()]) == SERVICE_FAILURE_MESSAGE

    @pytest.mark.asyncio
    async def test_empty_answer(self):
        service = AuditService(text_generator=FakeTextGenerator(response="   "))
        assert await service.request_audit([make_record()]) == EMPTY_RESPONSE_MESSAGE

    @pytest.mark.asyncio
    async def test_zero_records_are_still_sent(self):
        generator = FakeTextGenerator()
        service = AuditService(text_generator=generator)

        await service.request_audit([])

        assert len(generator.prompts) == 1

    @pytest.mark.asyncio
    async def test_second_request_while_pending_is_rejected(self):
        service = AuditService(text_generator=MockTextGenerationAdapter(delay_seconds=0.2))

        first = asyncio.create_task(service.request_audit([make_record()]))
        await asyncio.sleep(0.05)
        assert service.is_busy

        with pytest.raises(BusinessRuleViolationException) as exc_info:
            await service.request_audit([make_record()])
        assert exc_info.value.http_status_code == 409

        assert "Audit Report" in await first
        assert not service.is_busy

    @pytest.mark.asyncio
    async def test_lock_released_after_failure(self):
        generator = FakeTextGenerator(error=unavailable())
        service = AuditService(text_generator=generator)

        await service.request_audit([])
        generator.error = None

        assert await service.request_audit([]) == generator.response
