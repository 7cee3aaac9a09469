import base64

import pytest

from pixcard.renderer import generate_qr_image, render_qr_payload

PAYLOAD = "00020126350014br.gov.bcb.pix0113user@bank.com5204000053039865802BR5903ANA6009SAO PAULO62070503***6304ABCD"


def test_render_returns_png_bytes_and_base64():
    result = render_qr_payload(PAYLOAD)
    assert result["png_bytes"].startswith(b"\x89PNG")
    assert base64.b64decode(result["png_base64"]) == result["png_bytes"]


def test_title_adds_frame_and_label():
    plain = generate_qr_image(PAYLOAD)
    framed = generate_qr_image(PAYLOAD, title="pixcard")
    assert framed.size[0] > plain.size[0]
    assert framed.size[1] > plain.size[1]


def test_higher_error_correction_needs_at_least_as_many_modules():
    low = generate_qr_image(PAYLOAD, level="L", box_size=1)
    high = generate_qr_image(PAYLOAD, level="H", box_size=1)
    assert high.size[0] >= low.size[0]


def test_unknown_error_correction_level_fails():
    with pytest.raises(KeyError):
        generate_qr_image(PAYLOAD, level="X")
