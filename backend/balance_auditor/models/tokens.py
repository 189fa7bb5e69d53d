"""Pydantic schemas for token balances, metadata and display records."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class RawTokenBalance(BaseModel):
    """A single balance entry as listed by the data provider."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    contract_address: str = Field(..., alias="contractAddress")
    token_balance: Optional[str] = Field(
        None,
        alias="tokenBalance",
        description="Unsigned integer in the token's smallest unit, hex or decimal",
    )


class TokenMetadata(BaseModel):
    """Descriptive metadata for an ERC-20 contract."""

    name: Optional[str] = None
    symbol: Optional[str] = None
    decimals: Optional[int] = None
    logo: Optional[str] = None


class DisplayToken(BaseModel):
    """Display-ready token card built once per query."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    contract_address: str
    raw_balance: str
    formatted_balance: str
    name: Optional[str] = None
    symbol: Optional[str] = None
    decimals: int = Field(..., ge=0)
    logo: Optional[str] = None

    @computed_field(alias="displayName")
    @property
    def display_name(self) -> str:
        return self.name or "Unknown Token"

    @computed_field(alias="displaySymbol")
    @property
    def display_symbol(self) -> str:
        return self.symbol or "N/A"

    @computed_field(alias="initial")
    @property
    def initial(self) -> str:
        return self.symbol[0].upper() if self.symbol else "?"


__all__ = ["RawTokenBalance", "TokenMetadata", "DisplayToken"]
