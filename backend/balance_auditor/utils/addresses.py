"""Helpers for validating wallet addresses submitted by users."""

from __future__ import annotations

ADDRESS_PREFIX = "0x"
ADDRESS_LENGTH = 42

EMPTY_INPUT_MESSAGE = "Please enter a wallet address."
INVALID_FORMAT_MESSAGE = (
    "Please enter a valid Ethereum address (starts with 0x and is 42 characters long)."
)


class AddressValidationError(ValueError):
    """Raised when a candidate wallet address is rejected before any lookup."""

    kind = "InvalidFormat"
    message = INVALID_FORMAT_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class EmptyInputError(AddressValidationError):
    """The submitted address was blank."""

    kind = "EmptyInput"
    message = EMPTY_INPUT_MESSAGE


class InvalidFormatError(AddressValidationError):
    """The submitted address is not 0x-prefixed or not 42 characters long."""


def validate_wallet_address(value: str | None) -> str:
    """Return the trimmed address, or raise if it cannot be an Ethereum address.

    Only the prefix and length are checked; hex digits and EIP-55 checksums are
    left to the provider.
    """
    address = (value or "").strip()
    if not address:
        raise EmptyInputError()
    if not address.startswith(ADDRESS_PREFIX) or len(address) != ADDRESS_LENGTH:
        raise InvalidFormatError()
    return address


__all__ = [
    "AddressValidationError",
    "EmptyInputError",
    "InvalidFormatError",
    "validate_wallet_address",
]
