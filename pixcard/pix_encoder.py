"""Static Pix (BR Code) payload encoder and decoder."""
from __future__ import annotations

import string
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

from .crc import crc16_ccitt
from .normalize import DEFAULT_NORMALIZER, TextNormalizer
from .services.errors import err_bad_payload, err_crc_mismatch, err_empty_required_value, err_invalid_amount
from .tlv import TLVItem, build_composite, encode_field, parse_tlv

MERCHANT_NAME_MAX = 25
MERCHANT_CITY_MAX = 15
REFERENCE_LABEL_MAX = 25
AMOUNT_MAX = 13
REFERENCE_LABEL_PLACEHOLDER = "***"
CRC_PREFIX = "6304"

_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class MerchantConstants:
    gui: str = "br.gov.bcb.pix"
    merchant_category_code: str = "0000"
    currency: str = "986"
    country: str = "BR"


DEFAULT_CONSTANTS = MerchantConstants()


@dataclass(frozen=True)
class PixPayloadInput:
    payment_key: str
    merchant_name: str
    merchant_city: str
    amount: Decimal | float | int | None = None
    transaction_id: str = ""

    def account_subitems(self, gui: str) -> Iterable[TLVItem]:
        yield TLVItem(tag="00", value=gui)
        yield TLVItem(tag="01", value=self.payment_key)

    def additional_data_subitems(self) -> Iterable[TLVItem]:
        reference = self.transaction_id[:REFERENCE_LABEL_MAX] or REFERENCE_LABEL_PLACEHOLDER
        yield TLVItem(tag="05", value=reference)


@dataclass(frozen=True)
class EncodedPayload:
    payload: str
    crc: str
    amount: str | None = None
    merchant_name: str | None = None


@dataclass(frozen=True)
class DecodedPayload:
    payment_key: str
    merchant_name: str
    merchant_city: str
    amount: Decimal | None
    transaction_id: str
    crc: str
    items: tuple[TLVItem, ...]


def format_amount(amount: Decimal | float | int | None) -> str | None:
    """Return the amount with two decimals and a period, or None when it must be omitted."""

    if amount is None:
        return None
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation as exc:
        raise err_invalid_amount(f"Amount {amount!r} is not a number") from exc
    if not value.is_finite():
        raise err_invalid_amount(f"Amount {amount!r} is not a finite number")
    try:
        value = value.quantize(_CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise err_invalid_amount(f"Amount {amount!r} is out of range") from exc
    if value <= 0:
        return None
    formatted = str(value)
    if len(formatted) > AMOUNT_MAX:
        raise err_invalid_amount(f"Amount {formatted} exceeds {AMOUNT_MAX} characters")
    return formatted


def append_crc(payload_no_crc: str) -> EncodedPayload:
    """Compute CRC16-CCITT over the payload plus the 6304 header and append it."""

    crc_input = f"{payload_no_crc}{CRC_PREFIX}"
    crc = crc16_ccitt(crc_input)
    return EncodedPayload(payload=f"{crc_input}{crc}", crc=crc)


def build_payload(
    data: PixPayloadInput,
    *,
    constants: MerchantConstants = DEFAULT_CONSTANTS,
    normalizer: TextNormalizer = DEFAULT_NORMALIZER,
) -> EncodedPayload:
    """Assemble a static Pix payload in the fixed BR Code field order."""

    if not data.payment_key or not data.payment_key.strip():
        raise err_empty_required_value("payment_key")

    merchant_name = normalizer(data.merchant_name)[:MERCHANT_NAME_MAX]
    if not merchant_name:
        raise err_empty_required_value("merchant_name")
    merchant_city = normalizer(data.merchant_city)[:MERCHANT_CITY_MAX]
    if not merchant_city:
        raise err_empty_required_value("merchant_city")

    amount = format_amount(data.amount)

    fragments = [
        encode_field("00", "01"),
        build_composite("26", data.account_subitems(constants.gui)),
        encode_field("52", constants.merchant_category_code),
        encode_field("53", constants.currency),
    ]
    if amount is not None:
        fragments.append(encode_field("54", amount))
    fragments.extend(
        [
            encode_field("58", constants.country),
            encode_field("59", merchant_name),
            encode_field("60", merchant_city),
            build_composite("62", data.additional_data_subitems()),
        ]
    )
    encoded = append_crc("".join(fragments))
    return replace(encoded, amount=amount, merchant_name=merchant_name)


def _subfields(value: str) -> dict[str, str]:
    return {item.tag: item.value for item in parse_tlv(value)}


def decode_payload(payload: str, *, constants: MerchantConstants = DEFAULT_CONSTANTS) -> DecodedPayload:
    """Verify the trailing CRC of a static Pix payload and extract its fields."""

    payload = payload.strip()
    if len(payload) < 8 or payload[-8:-4] != CRC_PREFIX:
        raise err_bad_payload("Payload must end with the 6304 checksum field")
    carried = payload[-4:].upper()
    if any(ch not in string.hexdigits for ch in carried):
        raise err_bad_payload("Checksum must be four hexadecimal digits")
    expected = crc16_ccitt(payload[:-4])
    if carried != expected:
        raise err_crc_mismatch(expected, carried)

    items = tuple(parse_tlv(payload))
    if not items or items[0].tag != "00" or items[0].value != "01":
        raise err_bad_payload("Payload format indicator 000201 must come first")
    fields = {item.tag: item.value for item in items}

    account = _subfields(fields.get("26", ""))
    if account.get("00", "").lower() != constants.gui.lower():
        raise err_bad_payload(f"Merchant account information does not carry {constants.gui}")
    payment_key = account.get("01", "")
    if not payment_key:
        raise err_bad_payload("Merchant account information has no payment key")

    amount: Decimal | None = None
    if "54" in fields:
        try:
            amount = Decimal(fields["54"])
        except InvalidOperation as exc:
            raise err_bad_payload(f"Invalid transaction amount {fields['54']!r}") from exc

    additional = _subfields(fields.get("62", ""))

    return DecodedPayload(
        payment_key=payment_key,
        merchant_name=fields.get("59", ""),
        merchant_city=fields.get("60", ""),
        amount=amount,
        transaction_id=additional.get("05", ""),
        crc=carried,
        items=items,
    )
