"""Pix charge generation and QR building services."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable

from ..config import Settings, settings as default_settings
from ..monitoring import record_payload_generated
from ..pix_encoder import EncodedPayload, PixPayloadInput, build_payload, format_amount
from ..renderer import render_qr_payload
from .errors import err_empty_required_value, err_invalid_amount

logger = logging.getLogger("pixcard.charges")


@dataclass(slots=True)
class ProfilePix:
    """Pix fields of a profile as returned by the profile store."""

    pix_key: str | None
    full_name: str
    pix_beneficiary_name: str | None = None
    pix_beneficiary_city: str | None = None


@dataclass(slots=True)
class ChargeResult:
    encoded: EncodedPayload
    qr_png_base64: str
    transaction_id: str
    beneficiary_name: str
    beneficiary_city: str
    display_amount: str


def transaction_id_from_clock(clock: Callable[[], float]) -> str:
    return f"TXN{int(clock() * 1000)}"


class PayloadGenerator:
    """Build payloads from explicit input, rendering a QR image on request."""

    def __init__(self, config: Settings | None = None):
        self.settings = config or default_settings

    def generate(self, data: PixPayloadInput) -> EncodedPayload:
        encoded = build_payload(data, constants=self.settings.merchant_constants())
        with_amount = encoded.amount is not None
        record_payload_generated(with_amount)
        logger.info(
            "pix payload generated",
            extra={"crc": encoded.crc, "transaction_id": data.transaction_id, "with_amount": with_amount},
        )
        return encoded

    def render(self, encoded: EncodedPayload, title: str | None = None) -> str:
        render = render_qr_payload(
            encoded.payload,
            title=title,
            level=self.settings.qr_error_correction,
            box_size=self.settings.qr_box_size,
        )
        return render["png_base64"]


class PixChargeGenerator(PayloadGenerator):
    """Produce a payment code for a public profile and a visitor-entered amount."""

    def __init__(self, config: Settings | None = None, clock: Callable[[], float] = time.time):
        super().__init__(config)
        self.clock = clock

    def create_charge(self, profile: ProfilePix, amount: Decimal | float) -> ChargeResult:
        if not profile.pix_key or not profile.pix_key.strip():
            raise err_empty_required_value("pix_key")
        if format_amount(amount) is None:
            raise err_invalid_amount()

        beneficiary_name = profile.pix_beneficiary_name or profile.full_name
        beneficiary_city = profile.pix_beneficiary_city or self.settings.default_merchant_city
        transaction_id = transaction_id_from_clock(self.clock)

        encoded = self.generate(
            PixPayloadInput(
                payment_key=profile.pix_key,
                merchant_name=beneficiary_name,
                merchant_city=beneficiary_city,
                amount=amount,
                transaction_id=transaction_id,
            )
        )

        return ChargeResult(
            encoded=encoded,
            qr_png_base64=self.render(encoded, title=encoded.merchant_name),
            transaction_id=transaction_id,
            beneficiary_name=beneficiary_name,
            beneficiary_city=beneficiary_city,
            display_amount=f"R$ {encoded.amount}",
        )
