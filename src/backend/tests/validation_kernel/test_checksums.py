import pytest

from common.validation_kernel.checksums import (
    IBAN_MAX_LENGTH,
    compute_ean13_check_digit,
    compute_iban_check_digits,
    is_valid_ean13,
    is_valid_iban,
    mod97,
)


VALID_IBANS = [
    "GB82WEST12345698765432",
    "DE89370400440532013000",
    "FR1420041010050500013M02606",
    "NL91ABNA0417164300",
    "BE68539007547034",
]


@pytest.mark.parametrize("iban", VALID_IBANS)
def test_known_ibans_are_valid(iban):
    assert is_valid_iban(iban) is True


def test_iban_ignores_spacing_and_case():
    assert is_valid_iban("gb82 west 1234 5698 7654 32") is True


def test_every_single_digit_substitution_is_detected():
    iban = "DE89370400440532013000"
    for pos, ch in enumerate(iban):
        if not ch.isdigit():
            continue
        for replacement in "0123456789":
            if replacement == ch:
                continue
            mutated = iban[:pos] + replacement + iban[pos + 1 :]
            assert is_valid_iban(mutated) is False, mutated


def test_iban_length_bounds():
    assert is_valid_iban("GB82WEST123456") is False

    bban = "1234567890" * 3
    longest = "FR" + compute_iban_check_digits("FR", bban) + bban
    assert len(longest) == IBAN_MAX_LENGTH
    assert is_valid_iban(longest) is True

    too_long_bban = bban + "1"
    too_long = "FR" + compute_iban_check_digits("FR", too_long_bban) + too_long_bban
    assert is_valid_iban(too_long) is False


def test_iban_rejects_bad_shapes_without_raising():
    assert is_valid_iban("") is False
    assert is_valid_iban(None) is False
    assert is_valid_iban(12345) is False
    assert is_valid_iban("1282WEST12345698765432") is False
    assert is_valid_iban("GB82WEST1234569876543!") is False


def test_senegal_iban_with_computed_check_digits():
    bban = "K01001519000025690000"
    iban = "SN" + compute_iban_check_digits("SN", bban) + bban
    assert is_valid_iban(iban) is True


def test_check_digits_match_published_iban():
    assert compute_iban_check_digits("GB", "WEST12345698765432") == "82"
    assert compute_iban_check_digits("de", "370400440532013000") == "89"


def test_mod97_matches_big_integer_arithmetic():
    digits = "3214282912345698765432161182"
    assert mod97(digits) == int(digits) % 97
    assert mod97("96") == 96
    assert mod97("97") == 0


def test_mod97_rejects_non_digits():
    with pytest.raises(ValueError):
        mod97("12A4")
    with pytest.raises(ValueError):
        mod97("")


@pytest.mark.parametrize("barcode", ["4006381333931", "5901234123457"])
def test_known_ean13_are_valid(barcode):
    assert is_valid_ean13(barcode) is True


def test_ean13_check_digit():
    assert compute_ean13_check_digit("400638133393") == 1
    assert compute_ean13_check_digit("590123412345") == 7


def test_ean13_generated_check_digit_validates():
    for prefix in ("000000000000", "978020137962", "123456789012"):
        assert is_valid_ean13(prefix + str(compute_ean13_check_digit(prefix))) is True


def test_ean13_rejects_wrong_check_digit_and_shape():
    for digit in "023456789":
        assert is_valid_ean13("400638133393" + digit) is False
    assert is_valid_ean13("4006381333931") is True
    assert is_valid_ean13("400638133393") is False
    assert is_valid_ean13("40063813339310") is False
    assert is_valid_ean13(4006381333931) is False
    with pytest.raises(ValueError):
        compute_ean13_check_digit("40063813339")
