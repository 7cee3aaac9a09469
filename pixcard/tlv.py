"""Utility helpers to build and parse EMV-style TLV payloads."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from .services.errors import err_bad_payload, err_field_too_long, err_invalid_field_id, err_non_ascii_value

MAX_VALUE_LENGTH = 99


@dataclass(frozen=True)
class TLVItem:
    tag: str
    value: str

    def serialize(self) -> str:
        if len(self.tag) != 2 or not (self.tag.isascii() and self.tag.isdigit()):
            raise err_invalid_field_id(self.tag)
        if len(self.value) > MAX_VALUE_LENGTH:
            raise err_field_too_long(self.tag, len(self.value))
        # The length field counts characters while the CRC runs over bytes.
        if not self.value.isascii():
            raise err_non_ascii_value(self.tag)
        length = f"{len(self.value):02d}"
        return f"{self.tag}{length}{self.value}"


def encode_field(tag: str, value: str) -> str:
    return TLVItem(tag=tag, value=value).serialize()


def build_tlv(items: Iterable[TLVItem]) -> str:
    """Serialize iterable of TLV items into EMV string."""

    return "".join(item.serialize() for item in items)


def build_composite(tag: str, subitems: Iterable[TLVItem]) -> str:
    """Serialize subitems in order and wrap them as the value of ``tag``."""

    return encode_field(tag, build_tlv(subitems))


def parse_tlv(payload: str) -> Iterator[TLVItem]:
    """Parse TLV payload string into TLV items."""

    idx = 0
    total = len(payload)
    while idx + 4 <= total:
        tag = payload[idx : idx + 2]
        raw_length = payload[idx + 2 : idx + 4]
        if not (raw_length.isascii() and raw_length.isdigit()):
            raise err_bad_payload(f"Invalid TLV length {raw_length!r} for tag {tag}")
        length = int(raw_length)
        value_start = idx + 4
        value_end = value_start + length
        if value_end > total:
            raise err_bad_payload("Invalid TLV length exceeds payload")
        value = payload[value_start:value_end]
        yield TLVItem(tag=tag, value=value)
        idx = value_end
    if idx != total:
        raise err_bad_payload("Dangling TLV data detected")
