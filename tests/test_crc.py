from pixcard.crc import crc16, crc16_ccitt


def test_check_value():
    assert crc16(b"123456789") == 0x29B1
    assert crc16_ccitt("123456789") == "29B1"


def test_empty_input_returns_initial_register():
    assert crc16_ccitt("") == "FFFF"


def test_str_and_bytes_agree():
    assert crc16_ccitt("000201") == crc16_ccitt(b"000201")


def test_output_is_four_uppercase_hex_digits():
    crc = crc16_ccitt("user@bank.com")
    assert len(crc) == 4
    assert crc == crc.upper()
    int(crc, 16)


def test_reproduces_published_example_checksum(bcb_example):
    assert crc16_ccitt(bcb_example[:-4]) == "1D3D"
