"""
Tests for numeric fact extraction
"""

import pytest

from services.fact_extractor import NumericFact
from services.fact_extractor import FactExtractor


class TestRent:
    """Rent pattern priority and range"""

    @pytest.mark.parametrize("text, expected", [("Monthly rent of ₹15,000 payable in advance", 15000),
                                                ("Rent is Rs. 18000 per month", 18000),
                                                ("rent is rs 12,500", 12500),
                                                ("A sum of 20,000 rupees each month", 20000),
                                                ("The rent shall be 25,000 per month", 25000),
                                                ("Payable monthly: 9,500 on the 5th", 9500),
                                               ])
    def test_patterns(self, text, expected):
        assert FactExtractor().extract_rent(text) == NumericFact(value=expected, unit="rupee")

    def test_currency_marker_wins_over_earlier_number(self):
        """Rent on the 5th, ₹30,000: the currency-marked figure is used"""
        assert FactExtractor().extract_rent("Rent for flat 2 due on 5th is ₹30,000").value == 30000

    def test_out_of_range_is_ignored(self):
        assert FactExtractor().extract_rent("Rent is ₹500 per month") is None

    def test_bare_number_fallback(self):
        assert FactExtractor(bare_number_fallback=True).extract_rent("Tenant pays 14000 each cycle").value == 14000

    def test_bare_number_fallback_disabled(self):
        assert FactExtractor(bare_number_fallback=False).extract_rent("Tenant pays 14000 each cycle") is None

    def test_no_amount(self):
        assert FactExtractor().extract_rent("Rent is due on time") is None


class TestDepositAndNotice:
    """Deposit and notice families"""

    def test_deposit_months(self):
        assert FactExtractor().extract_deposit("Security deposit of 2 months rent") == NumericFact(value=2, unit="month")

    def test_deposit_amount(self):
        assert FactExtractor().extract_deposit("Security deposit of Rs. 50,000") == NumericFact(value=50000, unit="rupee")

    @pytest.mark.parametrize("text, expected", [("Either party may terminate with 2 months written notice", NumericFact(2, "month")),
                                                ("Notice of not less than 3 months is required", NumericFact(3, "month")),
                                                ("Give 1 month prior intimation", NumericFact(1, "month")),
                                                ("Requires 30 days notice", NumericFact(30, "day")),
                                               ])
    def test_notice(self, text, expected):
        assert FactExtractor().extract_notice(text) == expected

    def test_unknown_type(self):
        assert FactExtractor().extract("pets", "No pets allowed, 2 months") is None


class TestNumericFact:
    """Display and comparison"""

    def test_display(self):
        assert NumericFact(15000, "rupee").display() == "₹15,000"
        assert NumericFact(1, "month").display() == "1 month"
        assert NumericFact(2, "month").display() == "2 months"
        assert NumericFact(30, "day").display() == "30 days"

    def test_days_and_months_are_comparable(self):
        month = NumericFact(1, "month")
        days  = NumericFact(30, "day")

        assert month.comparable_with(days)
        assert month.sort_key() == days.sort_key()

    def test_rupees_and_months_are_not_comparable(self):
        assert not NumericFact(2, "month").comparable_with(NumericFact(50000, "rupee"))
