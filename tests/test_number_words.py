"""Unit tests for amount-in-words conversion"""

import pytest

from number_words import convert_less_than_one_thousand, format_indian, number_to_words


class TestNumberToWords:

    def test_zero(self):
        assert number_to_words(0) == "Zero Rupees Only"

    @pytest.mark.parametrize("amount, words", [
        (1, "One Rupees Only"),
        (19, "Nineteen Rupees Only"),
        (40, "Forty Rupees Only"),
        (100, "One Hundred Rupees Only"),
        (115, "One Hundred and Fifteen Rupees Only"),
        (1000, "One Thousand Rupees Only"),
        (125000, "One Lakh Twenty Five Thousand Rupees Only"),
        (100001, "One Lakh One Rupees Only"),
        (9999999, "Ninety Nine Lakh Ninety Nine Thousand Nine Hundred and Ninety Nine Rupees Only"),
    ])
    def test_indian_grouping(self, amount, words):
        assert number_to_words(amount) == words

    def test_rupees_and_paise(self):
        assert number_to_words(1234.56) == (
            "One Thousand Two Hundred and Thirty Four Rupees and Fifty Six Paise Only"
        )

    def test_paise_only(self):
        assert number_to_words(0.5) == "Fifty Paise Only"

    def test_paise_rounding_to_a_rupee_carries_over(self):
        assert number_to_words(10.999) == "Eleven Rupees Only"

    def test_fraction_below_half_a_paisa_is_zero(self):
        assert number_to_words(0.004) == "Zero Rupees Only"


class TestCroreTier:

    def test_one_crore(self):
        assert number_to_words(10000000) == "One Crore Rupees Only"

    def test_crore_with_lower_groups(self):
        assert number_to_words(12345678) == (
            "One Crore Twenty Three Lakh Forty Five Thousand Six Hundred and Seventy Eight Rupees Only"
        )

    def test_crore_count_uses_same_grouping(self):
        assert number_to_words(1500000000) == "One Hundred and Fifty Crore Rupees Only"


class TestOutOfRange:

    @pytest.mark.parametrize("amount", [-1, -0.5, float("nan"), float("inf")])
    def test_rejects_negative_and_non_finite(self, amount):
        with pytest.raises(ValueError):
            number_to_words(amount)


class TestConvertLessThanOneThousand:

    @pytest.mark.parametrize("num, words", [
        (0, ""),
        (7, "Seven"),
        (21, "Twenty One"),
        (90, "Ninety"),
        (305, "Three Hundred and Five"),
        (999, "Nine Hundred and Ninety Nine"),
    ])
    def test_groups(self, num, words):
        assert convert_less_than_one_thousand(num) == words


class TestFormatIndian:

    def test_lakh_grouping(self):
        assert format_indian(1234567.5) == "12,34,567.50"

    def test_whole_units(self):
        assert format_indian(125000, 0) == "1,25,000"

    def test_short_numbers_are_not_grouped(self):
        assert format_indian(999) == "999.00"

    def test_negative(self):
        assert format_indian(-1500) == "-1,500.00"
