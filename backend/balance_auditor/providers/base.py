"""Interface every token data provider implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from balance_auditor.models import RawTokenBalance, TokenMetadata


class ProviderError(RuntimeError):
    """Raised when the data provider cannot satisfy a request."""


class TokenDataProvider(ABC):
    """Source of ERC-20 balances and token metadata for a wallet."""

    name: str = "provider"

    @abstractmethod
    def list_balances(self, address: str) -> List[RawTokenBalance]:
        """Return raw ERC-20 balances held by ``address`` in provider order."""

    @abstractmethod
    def get_metadata(self, contract_address: str) -> TokenMetadata:
        """Return name, symbol, decimals and logo for a token contract."""


__all__ = ["ProviderError", "TokenDataProvider"]
