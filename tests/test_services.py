import base64
import io
from decimal import Decimal

import pytest
from PIL import Image

from pixcard.crc import crc16_ccitt
from pixcard.services.errors import ServiceError
from pixcard.services.generator import PixChargeGenerator, ProfilePix, transaction_id_from_clock
from pixcard.services.verify import PayloadVerifier

FIXED_NOW = 1700000000.5


@pytest.fixture
def generator(settings):
    return PixChargeGenerator(settings, clock=lambda: FIXED_NOW)


def test_transaction_id_uses_epoch_milliseconds():
    assert transaction_id_from_clock(lambda: FIXED_NOW) == "TXN1700000000500"


def test_charge_uses_beneficiary_fields(generator):
    profile = ProfilePix(
        pix_key="user@bank.com",
        full_name="Maria Souza",
        pix_beneficiary_name="Loja da Maria",
        pix_beneficiary_city="Curitiba",
    )
    result = generator.create_charge(profile, Decimal("25"))

    payload = result.encoded.payload
    assert "5913LOJA DA MARIA" in payload
    assert "6008CURITIBA" in payload
    assert "540525.00" in payload
    assert "0516TXN1700000000500" in payload
    assert crc16_ccitt(payload[:-4]) == result.encoded.crc
    assert result.transaction_id == "TXN1700000000500"
    assert result.display_amount == "R$ 25.00"


def test_charge_falls_back_to_full_name_and_default_city(generator):
    profile = ProfilePix(pix_key="user@bank.com", full_name="João da Silva")
    result = generator.create_charge(profile, 10)

    assert result.beneficiary_name == "João da Silva"
    assert result.beneficiary_city == "SAO PAULO"
    assert "5913JOAO DA SILVA" in result.encoded.payload
    assert "6009SAO PAULO" in result.encoded.payload


def test_charge_renders_png(generator):
    result = generator.create_charge(ProfilePix(pix_key="user@bank.com", full_name="Ana"), 1)
    assert base64.b64decode(result.qr_png_base64).startswith(b"\x89PNG\r\n\x1a\n")


@pytest.mark.parametrize("pix_key", [None, "", "  "])
def test_charge_without_key_is_refused(generator, pix_key):
    with pytest.raises(ServiceError) as exc_info:
        generator.create_charge(ProfilePix(pix_key=pix_key, full_name="Ana"), 10)
    assert exc_info.value.code == "ERR_EMPTY_REQUIRED_VALUE"


@pytest.mark.parametrize("amount", [0, -1, Decimal("0.00"), Decimal("0.001")])
def test_charge_requires_positive_amount(generator, amount):
    with pytest.raises(ServiceError) as exc_info:
        generator.create_charge(ProfilePix(pix_key="user@bank.com", full_name="Ana"), amount)
    assert exc_info.value.code == "ERR_INVALID_AMOUNT"
    assert exc_info.value.status_code == 400


def test_verifier_round_trips_generated_charge(generator, settings):
    result = generator.create_charge(ProfilePix(pix_key="user@bank.com", full_name="Ana"), Decimal("3.5"))
    decoded = PayloadVerifier(settings).verify(result.encoded.payload)
    assert decoded.amount == Decimal("3.50")
    assert decoded.merchant_name == "ANA"
    assert decoded.transaction_id == result.transaction_id


def test_verifier_honours_configured_scheme(settings, bcb_example):
    foreign = settings.model_copy(update={"pix_gui": "br.example.pay"})
    with pytest.raises(ServiceError) as exc_info:
        PayloadVerifier(foreign).verify(bcb_example)
    assert exc_info.value.code == "ERR_BAD_PAYLOAD"


def test_charge_qr_is_labelled_with_beneficiary(generator):
    profile = ProfilePix(pix_key="user@bank.com", full_name="João da Silva")
    charge = generator.create_charge(profile, 10)
    labelled = Image.open(io.BytesIO(base64.b64decode(charge.qr_png_base64)))
    plain = Image.open(io.BytesIO(base64.b64decode(generator.render(charge.encoded))))

    assert charge.encoded.merchant_name == "JOAO DA SILVA"
    assert labelled.size[1] > labelled.size[0]
    assert labelled.size[0] > plain.size[0]
