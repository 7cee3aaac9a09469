from __future__ import annotations

import pytest

from pixcard.config import Settings
from pixcard.pix_encoder import PixPayloadInput

# Public example from the Pix BR Code manual.
BCB_EXAMPLE = (
    "00020126580014br.gov.bcb.pix0136123e4567-e12b-12d1-a456-426655440000"
    "5204000053039865802BR5913Fulano de Tal6008BRASILIA62070503***63041D3D"
)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, api_key="test-key")


@pytest.fixture
def scenario_input() -> PixPayloadInput:
    return PixPayloadInput(
        payment_key="user@bank.com",
        merchant_name="JOAO DA SILVA",
        merchant_city="SAO PAULO",
        amount=10.00,
        transaction_id="TXN123",
    )


@pytest.fixture
def bcb_example() -> str:
    return BCB_EXAMPLE
