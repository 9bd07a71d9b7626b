"""
Decision Router

Exposes the deterministic decision core to an orchestrator over HTTP.
The router adds no decision logic of its own.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from ..schemas.decision_schema import (
    CredibilityRequest,
    CredibilityResponse,
    DecisionRequest,
    DecisionResponse,
)
from ..services.credibility import credibility_of
from ..services.packet_assembler import assemble_decision
from ..timing import sync_timer

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Decision"],
    responses={
        500: {"description": "Internal server error while assembling the decision"}
    }
)


@router.post(
    "/decide",
    response_model=DecisionResponse,
    status_code=status.HTTP_200_OK,
    summary="Assemble a Go/No-Go decision",
    response_description="Final rubric, enforced decision, consolidated evidence and warnings"
)
async def decide(request: DecisionRequest) -> DecisionResponse:
    """
    Consolidate evidence, score it and enforce the kill rules over the
    draft rubric supplied by the caller.
    """
    wedge_count = (
        request.wedge_option_count
        if request.wedge_option_count is not None
        else len(request.wedge_options)
    )
    try:
        with sync_timer("decide_endpoint", "ASSEMBLE"):
            outcome = assemble_decision(
                evidence=request.evidence,
                draft_rubric=request.draft_rubric,
                wedge_option_count=wedge_count,
                competitors=request.competitors,
            )
    except Exception as e:
        logger.exception("Decision assembly failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Decision failed: {str(e)}"
        )

    return DecisionResponse(success=True, outcome=outcome)


@router.post(
    "/credibility",
    response_model=CredibilityResponse,
    summary="Look up credibility tiers",
    description="Return the credibility tier assigned to each URL"
)
async def credibility(request: CredibilityRequest) -> CredibilityResponse:
    return CredibilityResponse(tiers={url: credibility_of(url) for url in request.urls})


@router.get(
    "/decide/health",
    summary="Health Check",
    description="Check if the decision service is running",
    response_description="Health status"
)
async def health_check():
    """Simple health check endpoint."""
    return {"status": "healthy", "service": "decision-core"}
