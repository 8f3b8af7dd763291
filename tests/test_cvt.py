import pytest

from coremark.cvt import ecvt, fcvt


def test_fcvt_worked_example():
    result = fcvt(3.14159, 2)
    assert result.digits == "314"
    assert result.decpt == 1
    assert result.negative is False


@pytest.mark.parametrize("value", [3.14159, 2.71828, 123.456, 9.87654, 9.96])
@pytest.mark.parametrize("ndigits", [1, 2, 3])
def test_fcvt_matches_fixed_formatting(value, ndigits):
    formatted = f"{value:.{ndigits}f}"
    result = fcvt(value, ndigits)
    assert result.digits == formatted.replace(".", "")
    assert result.decpt == formatted.index(".")


@pytest.mark.parametrize("value", [3.14159, 123.456, 9.87654, 9.96])
@pytest.mark.parametrize("ndigits", [2, 3, 4])
def test_ecvt_matches_exponent_formatting(value, ndigits):
    mantissa, exponent = f"{value:.{ndigits - 1}e}".split("e")
    result = ecvt(value, ndigits)
    assert result.digits == mantissa.replace(".", "")
    assert result.decpt == int(exponent) + 1


@pytest.mark.parametrize("value", [3.14159, 123.456, 9.96])
def test_ecvt_length_is_ndigits(value):
    for ndigits in range(1, 8):
        assert len(ecvt(value, ndigits).digits) == ndigits


@pytest.mark.parametrize("convert", [ecvt, fcvt])
def test_negative_values_only_change_sign(convert):
    positive = convert(123.456, 3)
    negative = convert(-123.456, 3)
    assert negative.negative is True
    assert negative.digits == positive.digits
    assert negative.decpt == positive.decpt


def test_fcvt_zero_gives_zero_digits():
    result = fcvt(0.0, 3)
    assert set(result.digits) == {"0"}
    assert len(result.digits) == 3
    assert result.decpt == 0


def test_fcvt_too_small_gives_no_digits():
    result = fcvt(0.0001, 2)
    assert result.digits == ""
    assert result.decpt < 0


def test_negative_ndigits_is_clamped_to_zero():
    assert fcvt(3.7, -5) == fcvt(3.7, 0)
    assert ecvt(3.7, -5) == ecvt(3.7, 0)


def test_small_fraction_rounds_up_through_carry():
    result = fcvt(0.05, 1)
    formatted = f"{0.06:.1f}"
    assert "0." + "0" * -result.decpt + result.digits == formatted


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_values_are_rejected(value):
    with pytest.raises(ValueError):
        fcvt(value, 2)
    with pytest.raises(ValueError):
        ecvt(value, 2)