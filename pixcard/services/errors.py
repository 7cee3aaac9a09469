"""Shared service error definitions."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ServiceError(Exception):
    code: str
    message: str
    status_code: int = 400

    def __str__(self) -> str:  # noqa: D401 override
        return f"{self.code}: {self.message}"


def err_invalid_field_id(tag: str) -> ServiceError:
    return ServiceError(code="ERR_INVALID_FIELD_ID", message=f"Field id must be two digits, got {tag!r}", status_code=500)


def err_field_too_long(tag: str, length: int) -> ServiceError:
    return ServiceError(
        code="ERR_FIELD_TOO_LONG",
        message=f"Field {tag} value has {length} characters, maximum is 99",
        status_code=500,
    )


def err_empty_required_value(name: str) -> ServiceError:
    return ServiceError(code="ERR_EMPTY_REQUIRED_VALUE", message=f"{name} must not be empty", status_code=422)


def err_non_ascii_value(tag: str) -> ServiceError:
    return ServiceError(code="ERR_NON_ASCII_VALUE", message=f"Field {tag} contains non-ASCII characters", status_code=422)


def err_invalid_amount(message: str | None = None) -> ServiceError:
    return ServiceError(code="ERR_INVALID_AMOUNT", message=message or "Amount must be greater than zero", status_code=400)


def err_bad_payload(message: str | None = None) -> ServiceError:
    return ServiceError(code="ERR_BAD_PAYLOAD", message=message or "Invalid payment payload", status_code=400)


def err_crc_mismatch(expected: str, actual: str) -> ServiceError:
    return ServiceError(
        code="ERR_CRC_MISMATCH",
        message=f"Checksum mismatch: payload carries {actual}, computed {expected}",
        status_code=422,
    )
