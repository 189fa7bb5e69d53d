"""Validation, enrichment and formatting of wallet token balances."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional, Union

from balance_auditor.models import (
    DisplayToken,
    QueryOutcome,
    QueryStatus,
    RawTokenBalance,
    TokenMetadata,
)
from balance_auditor.providers.base import ProviderError, TokenDataProvider
from balance_auditor.utils.addresses import AddressValidationError, validate_wallet_address
from balance_auditor.utils.units import DEFAULT_DECIMALS, format_units, is_zero_amount

LOGGER = logging.getLogger(__name__)

ProviderSource = Union[TokenDataProvider, Callable[[], TokenDataProvider]]

EMPTY_RESULT_MESSAGE = "No ERC-20 tokens found for this address. Try another one!"
INVALID_ADDRESS_MESSAGE = "Invalid Ethereum address. Please check your input."
API_KEY_MESSAGE = (
    "Alchemy API Key error. Please ensure your API key is correct and not rate-limited."
)
GENERIC_FAILURE_MESSAGE = (
    "An unexpected error occurred while fetching token balances. Please try again."
)


def metadata_concurrency() -> int:
    """Worker count for the metadata stage, read from METADATA_CONCURRENCY."""
    raw = os.getenv("METADATA_CONCURRENCY", "1")
    try:
        return max(1, int(raw))
    except ValueError:
        LOGGER.warning("Ignoring invalid METADATA_CONCURRENCY value %r", raw)
        return 1


def _fetch_metadata(
    provider: TokenDataProvider,
    balances: List[RawTokenBalance],
    max_workers: int,
) -> Dict[str, TokenMetadata]:
    """Fetch metadata once per distinct contract, keyed by contract address."""
    contracts = list(dict.fromkeys(balance.contract_address for balance in balances))

    if max_workers <= 1 or len(contracts) <= 1:
        return {contract: provider.get_metadata(contract) for contract in contracts}

    with ThreadPoolExecutor(max_workers=min(max_workers, len(contracts))) as pool:
        results = list(pool.map(provider.get_metadata, contracts))
    return dict(zip(contracts, results))


def build_display_token(balance: RawTokenBalance, metadata: TokenMetadata) -> Optional[DisplayToken]:
    """Format one balance, returning None when it amounts to zero."""
    decimals = metadata.decimals if metadata.decimals is not None else DEFAULT_DECIMALS

    try:
        formatted = format_units(balance.token_balance, decimals)
    except (TypeError, ValueError) as exc:
        raise ProviderError(
            f"Malformed balance {balance.token_balance!r} for {balance.contract_address}"
        ) from exc

    if is_zero_amount(formatted):
        LOGGER.debug("Skipping zero balance for %s", balance.contract_address)
        return None

    return DisplayToken(
        contract_address=balance.contract_address,
        raw_balance=balance.token_balance,
        formatted_balance=formatted,
        name=metadata.name,
        symbol=metadata.symbol,
        decimals=decimals,
        logo=metadata.logo,
    )


def normalize_balances(
    address: str,
    provider: ProviderSource,
    max_workers: int = 1,
) -> List[DisplayToken]:
    """Validate ``address`` and return its non-zero token balances in provider order.

    Raises ``AddressValidationError`` before any provider call when the address is
    rejected. ``provider`` may be a zero-argument factory, which is only called
    once the address is valid. ``ProviderError`` propagates unchanged so that no
    partial list is ever returned.
    """
    wallet = validate_wallet_address(address)
    if not isinstance(provider, TokenDataProvider):
        provider = provider()

    balances = provider.list_balances(wallet)
    if not balances:
        return []

    metadata = _fetch_metadata(provider, balances, max_workers)

    tokens: List[DisplayToken] = []
    for balance in balances:
        token = build_display_token(balance, metadata[balance.contract_address])
        if token is not None:
            tokens.append(token)

    LOGGER.info(
        "Normalized %d of %d token balances for %s",
        len(tokens),
        len(balances),
        wallet,
    )
    return tokens


def describe_provider_error(exc: Exception) -> str:
    """Map a provider failure onto the message shown to the user."""
    text = str(exc)
    lowered = text.lower()
    if "invalid address" in lowered or "not a valid address" in lowered:
        return INVALID_ADDRESS_MESSAGE
    if "API key" in text:
        return API_KEY_MESSAGE
    return GENERIC_FAILURE_MESSAGE


def run_query(
    address: str,
    provider: ProviderSource,
    max_workers: Optional[int] = None,
) -> QueryOutcome:
    """Run one balance query end to end and classify how it ended."""
    if max_workers is None:
        max_workers = metadata_concurrency()
    wallet = (address or "").strip()

    try:
        tokens = normalize_balances(address, provider, max_workers=max_workers)
    except AddressValidationError as exc:
        return QueryOutcome(status=QueryStatus.VALIDATION_ERROR, message=str(exc))
    except ProviderError as exc:
        LOGGER.error("Error fetching token data for %s: %s", wallet, exc)
        return QueryOutcome(
            status=QueryStatus.PROVIDER_FAILURE,
            address=wallet,
            message=describe_provider_error(exc),
        )
    except Exception as exc:
        LOGGER.exception("Unexpected error fetching token data for %s: %s", wallet, exc)
        return QueryOutcome(
            status=QueryStatus.PROVIDER_FAILURE,
            address=wallet,
            message=describe_provider_error(exc),
        )

    if not tokens:
        return QueryOutcome(status=QueryStatus.EMPTY, address=wallet, message=EMPTY_RESULT_MESSAGE)
    return QueryOutcome(status=QueryStatus.SUCCESS, address=wallet, tokens=tokens)


__all__ = [
    "build_display_token",
    "describe_provider_error",
    "normalize_balances",
    "run_query",
]
