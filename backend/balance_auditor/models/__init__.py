"""Pydantic data models exposed by the Balance Auditor backend."""

from .tokens import DisplayToken, RawTokenBalance, TokenMetadata
from .query import BalanceQueryRequest, QueryOutcome, QueryStatus, SessionState

__all__ = [
	"DisplayToken",
	"RawTokenBalance",
	"TokenMetadata",
	"BalanceQueryRequest",
	"QueryOutcome",
	"QueryStatus",
	"SessionState",
]
