"""Schemas describing the outcome of a balance query and the session state."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .tokens import DisplayToken


class QueryStatus(str, Enum):
    """Terminal states of a single balance query."""

    SUCCESS = "success"
    EMPTY = "empty"
    VALIDATION_ERROR = "validation_error"
    PROVIDER_FAILURE = "provider_failure"


class QueryOutcome(BaseModel):
    """Result handed to the presentation layer once a query completes."""

    model_config = ConfigDict(frozen=True)

    status: QueryStatus
    address: Optional[str] = None
    tokens: List[DisplayToken] = Field(default_factory=list)
    message: Optional[str] = None


class BalanceQueryRequest(BaseModel):
    """Request body for submitting an address from a form."""

    address: str = Field("", description="Ethereum wallet address, 0x-prefixed")


class SessionState(BaseModel):
    """Snapshot of the busy indicator and the most recently published outcome."""

    busy: bool = False
    generation: int = Field(default=0, ge=0)
    outcome: Optional[QueryOutcome] = None


__all__ = ["QueryStatus", "QueryOutcome", "BalanceQueryRequest", "SessionState"]
