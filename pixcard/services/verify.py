"""Validation of pasted Pix payment codes."""
from __future__ import annotations

import logging

from ..config import Settings, settings as default_settings
from ..pix_encoder import DecodedPayload, decode_payload
from .errors import ServiceError

logger = logging.getLogger("pixcard.verify")


class PayloadVerifier:
    def __init__(self, config: Settings | None = None):
        self.settings = config or default_settings

    def verify(self, payload: str) -> DecodedPayload:
        try:
            decoded = decode_payload(payload, constants=self.settings.merchant_constants())
        except ServiceError as exc:
            logger.info("pix payload rejected", extra={"code": exc.code})
            raise
        logger.info("pix payload verified", extra={"crc": decoded.crc, "has_amount": decoded.amount is not None})
        return decoded
