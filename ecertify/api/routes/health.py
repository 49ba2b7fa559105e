"""Health Probe: liveness endpoint for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up
"""

import logging
from fastapi import APIRouter, status

from ecertify.api.dependencies import LedgerDep

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(ledger: LedgerDep):
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "ecertify-ledger",
        "version": "1.0.0",
        "last_sequence": ledger.last_sequence,
    }
