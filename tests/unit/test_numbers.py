import sys

import pytest

import json_parser as jp


def test_integer_literal_decodes_to_int():
    value = jp.decode("1")
    assert value == 1
    assert type(value) is int

@pytest.mark.parametrize("text", ["1.0", "1e0", "1E0", "10e-1", "0.1e1"])
def test_fraction_or_exponent_decodes_to_float(text):
    value = jp.decode(text)
    assert value == 1.0
    assert type(value) is float

def test_negative_numbers():
    assert jp.decode("-0") == 0
    assert jp.decode("-12") == -12
    assert jp.decode("-0.5") == -0.5
    assert jp.decode("-2E+2") == -200.0

def test_large_integers_keep_full_precision():
    assert jp.decode("12345678901234567890123") == 12345678901234567890123

@pytest.mark.parametrize("text", ["01", "-01", "00", "[012]"])
def test_leading_zero_rejected(text):
    with pytest.raises(jp.UnexpectedCharacter) as ei:
        jp.decode(text)
    assert "leading zeros" in str(ei.value)

@pytest.mark.parametrize("text", ["1.", ".5", "-", "+1", "1e", "1e+", "1.e3", "0x10", "- 1"])
def test_malformed_numbers_rejected(text):
    with pytest.raises(jp.JSONSyntaxError):
        jp.decode(text)

def test_number_in_context():
    assert jp.decode('{"n": -3.25e2, "i": 0}') == {"n": -325.0, "i": 0}

@pytest.mark.parametrize("text", ["1e400", "-1e400", "[1.5E+999]"])
def test_float_overflow_is_not_decoded_as_infinity(text):
    with pytest.raises(AssertionError) as ei:
        jp.decode(text)
    assert "overflows a float" in str(ei.value)

def test_large_but_finite_exponent_still_decodes():
    assert jp.decode("1e308") == 1e308
    assert jp.decode("1e-400") == 0.0

@pytest.mark.skipif(
    not 0 < getattr(sys, "get_int_max_str_digits", lambda: 0)() < 5000,
    reason="interpreter has no int digit limit",
)
def test_int_digit_limit_reports_conversion_limit_with_short_lexeme():
    text = "1" * 5000
    with pytest.raises(AssertionError) as ei:
        jp.decode(text)
    msg = str(ei.value)
    assert "exceeds the int conversion limit" in msg
    assert "(5000 chars)" in msg
    assert "escaped the lexer grammar" not in msg
    assert len(msg) < 300
