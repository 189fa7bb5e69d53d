"""Alchemy JSON-RPC client for token balances and metadata, plus the shared instance."""

from __future__ import annotations

import logging
import os
import threading
from typing import Any, List, Optional

import requests
from dotenv import load_dotenv
from pydantic import ValidationError

from balance_auditor.models import RawTokenBalance, TokenMetadata
from balance_auditor.providers.base import ProviderError, TokenDataProvider

load_dotenv()

LOGGER = logging.getLogger(__name__)

ALCHEMY_MAINNET_URL = "https://eth-mainnet.g.alchemy.com/v2"
DEFAULT_TIMEOUT_SECONDS = 30.0

_CLIENT: Optional["AlchemyClient"] = None


class AlchemyClient(TokenDataProvider):
    """Thin wrapper over the Alchemy token API on Ethereum mainnet."""

    name = "alchemy"

    def __init__(
        self,
        api_key: str,
        base_url: str = ALCHEMY_MAINNET_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not api_key:
            raise ProviderError("Alchemy API key is not configured. Set ALCHEMY_API_KEY.")
        self._url = f"{base_url.rstrip('/')}/{api_key}"
        self._timeout = timeout
        self._session = session or requests.Session()
        self._request_id = 0
        self._id_lock = threading.Lock()

    def _call(self, method: str, params: List[Any]) -> Any:
        """Send one JSON-RPC request and return its ``result`` member."""
        with self._id_lock:
            self._request_id += 1
            request_id = self._request_id
        payload = {
            "jsonrpc": "2.0",
            "id": request_id,
            "method": method,
            "params": params,
        }

        try:
            LOGGER.info("Calling Alchemy %s", method)
            response = self._session.post(self._url, json=payload, timeout=self._timeout)
        except requests.RequestException as exc:
            LOGGER.error("Network error calling Alchemy %s: %s", method, type(exc).__name__)
            raise ProviderError(f"Failed to reach Alchemy for {method}") from exc

        if response.status_code in (401, 403):
            raise ProviderError(
                f"Alchemy rejected the API key (HTTP {response.status_code})"
            )
        if response.status_code == 429:
            raise ProviderError("Alchemy API key is rate-limited (HTTP 429)")

        try:
            response.raise_for_status()
        except requests.RequestException as exc:
            LOGGER.error("Alchemy %s failed with HTTP %s", method, response.status_code)
            raise ProviderError(f"Alchemy HTTP error {response.status_code}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise ProviderError(f"Alchemy returned a non-JSON response for {method}") from exc

        if not isinstance(body, dict):
            raise ProviderError(f"Unexpected Alchemy response format for {method}")

        error = body.get("error")
        if error:
            detail = error.get("message") if isinstance(error, dict) else str(error)
            LOGGER.error("Alchemy %s returned error: %s", method, detail)
            raise ProviderError(f"Alchemy error: {detail}")

        if "result" not in body:
            raise ProviderError(f"Unexpected Alchemy response format for {method}")
        return body["result"]

    def list_balances(self, address: str) -> List[RawTokenBalance]:
        result = self._call("alchemy_getTokenBalances", [address, "erc20"])
        entries = result.get("tokenBalances") if isinstance(result, dict) else None
        if not isinstance(entries, list):
            LOGGER.error("Unexpected token balance payload for %s: %s", address, result)
            raise ProviderError("Unexpected Alchemy token balance format")

        try:
            balances = [RawTokenBalance.model_validate(entry) for entry in entries]
        except ValidationError as exc:
            raise ProviderError("Malformed token balance entry from Alchemy") from exc

        LOGGER.info("Fetched %d token balances for %s", len(balances), address)
        return balances

    def get_metadata(self, contract_address: str) -> TokenMetadata:
        result = self._call("alchemy_getTokenMetadata", [contract_address])
        if result is None:
            result = {}
        try:
            return TokenMetadata.model_validate(result)
        except ValidationError as exc:
            raise ProviderError(
                f"Malformed token metadata from Alchemy for {contract_address}"
            ) from exc

    def close(self) -> None:
        self._session.close()


def _build_client() -> AlchemyClient:
    """Create a new Alchemy client from environment configuration."""
    api_key = os.getenv("ALCHEMY_API_KEY", "").strip()
    base_url = os.getenv("ALCHEMY_BASE_URL", ALCHEMY_MAINNET_URL)
    try:
        timeout = float(os.getenv("ALCHEMY_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS))
    except ValueError as exc:
        raise ProviderError("ALCHEMY_TIMEOUT_SECONDS must be a number") from exc

    LOGGER.info("Initializing Alchemy client for %s", base_url)
    return AlchemyClient(api_key, base_url=base_url, timeout=timeout)


def get_client() -> AlchemyClient:
    """Return the shared Alchemy client, creating it if needed."""
    global _CLIENT

    if _CLIENT is None:
        try:
            _CLIENT = _build_client()
        except ProviderError as exc:
            LOGGER.error("Unable to initialize Alchemy client: %s", exc)
            raise

    return _CLIENT


def close_client() -> None:
    """Close the shared Alchemy client if it has been initialized."""
    global _CLIENT

    if _CLIENT is not None:
        LOGGER.info("Closing Alchemy client")
        _CLIENT.close()
        _CLIENT = None


__all__ = ["AlchemyClient", "get_client", "close_client", "ALCHEMY_MAINNET_URL"]
