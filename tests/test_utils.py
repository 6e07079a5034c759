from app.utils import generate_otp, is_valid_phone, normalize_phone


def test_normalize_phone_strips_non_digits():
    assert normalize_phone("+1 (555) 123-4567") == "15551234567"
    assert normalize_phone("555.123.4567") == "5551234567"
    assert normalize_phone(None) == ""


def test_is_valid_phone_needs_ten_digits():
    assert is_valid_phone("5551234567") is True
    assert is_valid_phone("555123456") is False


def test_generate_otp_range():
    codes = {generate_otp() for _ in range(200)}
    assert all(len(c) == 6 and c.isdigit() and not c.startswith("0") for c in codes)
