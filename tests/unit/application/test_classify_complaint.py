"""Tests for ClassifyComplaintUseCase."""

import pytest

from app.application.use_cases.classify_complaint import (
    CLASSIFICATION_PROMPT,
    ClassifyComplaintUseCase,
)
from app.domain.exceptions import ClassificationParseFailure, ClassifierUnavailable
from app.domain.value_objects.enums import Category, Priority


def test_prompt_lists_every_category_and_priority():
    for c in Category:
        assert c.value in CLASSIFICATION_PROMPT
    for p in Priority:
        assert p.value in CLASSIFICATION_PROMPT


@pytest.mark.asyncio
async def test_single_call_in_json_mode(make_llm, classifier_reply):
    llm = make_llm(text_replies=[classifier_reply()])
    result = await ClassifyComplaintUseCase(llm).execute("Huge pothole on Main Street")

    assert result.category == Category.ROADS_AND_POTHOLES
    assert result.priority == Priority.HIGH
    assert len(llm.calls) == 1
    assert llm.calls[0]["json_mode"] is True
    assert "Huge pothole on Main Street" in llm.calls[0]["content"]


@pytest.mark.asyncio
async def test_garbage_output_raises_parse_failure(make_llm):
    llm = make_llm(text_replies=["I think it's a pothole, probably."])
    with pytest.raises(ClassificationParseFailure):
        await ClassifyComplaintUseCase(llm).execute("x")


@pytest.mark.asyncio
async def test_unavailable_classifier_becomes_parse_failure(make_llm):
    llm = make_llm(text_replies=[ClassifierUnavailable("timeout")])
    with pytest.raises(ClassificationParseFailure, match="timeout"):
        await ClassifyComplaintUseCase(llm).execute("x")
    assert len(llm.calls) == 1


@pytest.mark.asyncio
async def test_unexpected_llm_error_becomes_parse_failure(make_llm):
    llm = make_llm(text_replies=[RuntimeError("socket closed")])
    with pytest.raises(ClassificationParseFailure, match="socket closed"):
        await ClassifyComplaintUseCase(llm).execute("x")
