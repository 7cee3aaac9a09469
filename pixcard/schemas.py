"""Pydantic schemas for API contracts."""
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class PixPayloadRequest(BaseModel):
    payment_key: str = Field(description="Registered Pix key, passed through verbatim")
    merchant_name: str
    merchant_city: str
    amount: Decimal | None = Field(default=None, description="Omitted from the payload when null or not positive")
    transaction_id: str = Field(default="", max_length=64)
    render_qr: bool = False


class PixPayloadResponse(BaseModel):
    payload: str
    crc: str
    qr_png_base64: str | None = None


class PixChargeRequest(BaseModel):
    pix_key: str | None = None
    full_name: str
    pix_beneficiary_name: str | None = None
    pix_beneficiary_city: str | None = None
    amount: Decimal


class PixChargeResponse(BaseModel):
    payload: str
    crc: str
    qr_png_base64: str
    transaction_id: str
    beneficiary_name: str
    beneficiary_city: str
    display_amount: str


class VerifyRequest(BaseModel):
    payload: str = Field(min_length=1)


class VerifyResponse(BaseModel):
    valid: bool
    crc: str
    payment_key: str
    merchant_name: str
    merchant_city: str
    amount: Decimal | None
    transaction_id: str
