import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure the backend package is importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from balance_auditor.main import app  # noqa: E402  pylint: disable=wrong-import-position
from balance_auditor.models import RawTokenBalance, TokenMetadata  # noqa: E402
from balance_auditor.providers.base import TokenDataProvider  # noqa: E402

WALLET = "0x" + "ab" * 20
DAI = "0x6b175474e89094c44da98b954eedeac495271d0f"
USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"


class FakeProvider(TokenDataProvider):
    """In-memory provider recording every call it receives."""

    name = "fake"

    def __init__(self, balances=None, metadata=None, list_error=None, metadata_errors=None):
        self._balances = balances or []
        self._metadata = metadata or {}
        self._list_error = list_error
        self._metadata_errors = metadata_errors or {}
        self.list_calls = []
        self.metadata_calls = []

    def list_balances(self, address):
        self.list_calls.append(address)
        if self._list_error is not None:
            raise self._list_error
        return [
            RawTokenBalance(contract_address=contract, token_balance=balance)
            for contract, balance in self._balances
        ]

    def get_metadata(self, contract_address):
        self.metadata_calls.append(contract_address)
        if contract_address in self._metadata_errors:
            raise self._metadata_errors[contract_address]
        return TokenMetadata(**self._metadata.get(contract_address, {}))


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.fixture()
def sample_provider():
    return FakeProvider(
        balances=[
            (DAI, "0xde0b6b3a7640000"),
            (USDC, "0"),
            (WETH, "2500000000000000000"),
        ],
        metadata={
            DAI: {"name": "Dai Stablecoin", "symbol": "DAI", "decimals": 18, "logo": "https://static.alchemyapi.io/images/assets/4943.png"},
            USDC: {"name": "USD Coin", "symbol": "USDC", "decimals": 6},
            WETH: {"name": "Wrapped Ether", "symbol": "WETH", "decimals": None},
        },
    )
