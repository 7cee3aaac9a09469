"""CRC16-CCITT implementation."""
from __future__ import annotations

CRC16_POLY = 0x1021
CRC16_INIT = 0xFFFF


def crc16(data: bytes) -> int:
    """CRC-16/CCITT-FALSE: no reflection, no final XOR."""

    checksum = CRC16_INIT
    for byte in data:
        checksum ^= byte << 8
        for _ in range(8):
            if checksum & 0x8000:
                checksum = (checksum << 1) ^ CRC16_POLY
            else:
                checksum <<= 1
            checksum &= 0xFFFF
    return checksum


def crc16_ccitt(data: str | bytes) -> str:
    """Compute CRC16-CCITT (0x1021) for EMV payload strings as 4 uppercase hex digits."""

    if isinstance(data, str):
        data = data.encode("utf-8")
    return f"{crc16(data):04X}"
