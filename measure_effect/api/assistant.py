"""
FastAPI router module for the assistant placeholders.

Key Endpoints:
- POST /chat: answer a free-form question
- POST /generate-report: produce a report from the dashboard data

Both return templated text from TemplateNarrator; no model is called.
"""

import logging

from fastapi import APIRouter, HTTPException

from measure_effect.models.schemas import ChatRequest, ChatResponse, ReportRequest, ReportResponse
from measure_effect.services.narrative import TemplateNarrator


logger = logging.getLogger(__name__)

router = APIRouter()

narrator = TemplateNarrator()


@router.post('/chat', response_model=ChatResponse, summary="Ask the Assistant")
async def chat(request: ChatRequest) -> ChatResponse:
    """Return a placeholder answer embedding the question."""
    try:
        return ChatResponse(answer=narrator.answer(request.question))
    except Exception as e:
        logger.error(f"Error in chat API: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to answer question: {str(e)}")


@router.post('/generate-report', response_model=ReportResponse, summary="Generate Effect Report")
async def generate_report(request: ReportRequest) -> ReportResponse:
    """Return a placeholder report embedding the summary and detail data."""
    try:
        report = narrator.report(request.summaryData, request.clientDetailsData)
    except Exception as e:
        logger.error(f"Error generating report: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to generate report: {str(e)}")

    return ReportResponse(report=report)
