"""Endpoints running wallet balance queries and exposing the query state."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException

from balance_auditor.models import BalanceQueryRequest, QueryOutcome, QueryStatus, SessionState
from balance_auditor.providers.alchemy_client import get_client
from balance_auditor.services.session import QuerySession

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/balances", tags=["balances"])

_SESSION: Optional[QuerySession] = None


def get_session() -> QuerySession:
    """Return the process-wide query session backed by the shared Alchemy client."""
    global _SESSION

    if _SESSION is None:
        _SESSION = QuerySession(get_client)
    return _SESSION


def _respond(address: str, outcome: QueryOutcome) -> QueryOutcome:
    """Translate failed outcomes into HTTP errors."""
    if outcome.status is QueryStatus.VALIDATION_ERROR:
        LOGGER.warning("Validation error for address %r: %s", address, outcome.message)
        raise HTTPException(status_code=400, detail=outcome.message)
    if outcome.status is QueryStatus.PROVIDER_FAILURE:
        LOGGER.error("Provider failure for %s: %s", outcome.address, outcome.message)
        raise HTTPException(status_code=502, detail=outcome.message)

    LOGGER.info(
        "Balance query for %s finished with status %s (%d tokens)",
        outcome.address,
        outcome.status.value,
        len(outcome.tokens),
    )
    return outcome


@router.get("/state", response_model=SessionState)
def get_state() -> SessionState:
    """Return the busy indicator and the latest published outcome."""
    return get_session().snapshot()


@router.post("", response_model=QueryOutcome)
def submit_query(payload: BalanceQueryRequest) -> QueryOutcome:
    """Run a balance query for an address submitted in the request body."""
    return _respond(payload.address, get_session().run(payload.address))


@router.get("/{address}", response_model=QueryOutcome)
def get_balances(address: str) -> QueryOutcome:
    """Return the non-zero ERC-20 balances held by ``address``."""
    return _respond(address, get_session().run(address))


__all__ = ["router", "get_session"]
