"""Unit tests for credit card payoff solver"""

import math
import pytest
from fincalc_gateway.domain.payoff import format_payoff_time, minimum_payment, payoff


def test_payoff_closed_form():
    """Test $5000 at 22.99% paying $200/month"""
    result = payoff(5_000, 22.99, 200)

    r = 22.99 / 100 / 12
    expected_months = -math.log(1 - (5_000 * r) / 200) / math.log(1 + r)

    assert result.pays_off
    assert result.months_to_payoff == pytest.approx(expected_months)
    assert result.months_to_payoff == pytest.approx(34.35, abs=0.05)
    assert result.total_paid == pytest.approx(200 * expected_months)
    assert result.total_interest == pytest.approx(result.total_paid - 5_000)
    assert result.monthly_interest_charge == pytest.approx(5_000 * r)


def test_payoff_payment_below_interest_never_pays_off():
    """Test $9/month cannot outpace ~$95.79 monthly interest"""
    result = payoff(5_000, 22.99, 9)

    assert not result.pays_off
    assert math.isinf(result.months_to_payoff)
    assert math.isinf(result.total_interest)
    assert math.isinf(result.total_paid)
    assert result.monthly_interest_charge == pytest.approx(95.79, abs=0.01)


def test_payoff_payment_just_below_interest_never_pays_off():
    """Test payment a cent short of the monthly interest"""
    result = payoff(1_200, 12.0, 11.99)
    assert not result.pays_off


@pytest.mark.parametrize("balance,payment", [(0, 200), (-50, 200), (5_000, 0), (5_000, -10)])
def test_payoff_no_balance_or_payment_is_zero(balance, payment):
    """Test zero/negative balance or payment returns an all-zero result"""
    result = payoff(balance, 22.99, payment)

    assert result.pays_off
    assert result.months_to_payoff == 0
    assert result.total_interest == 0
    assert result.total_paid == 0
    assert result.monthly_interest_charge == 0


def test_payoff_zero_apr():
    """Test zero APR pays off in balance / payment months without interest"""
    result = payoff(1_000, 0, 100)

    assert result.months_to_payoff == pytest.approx(10)
    assert result.total_interest == pytest.approx(0)


def test_minimum_payment_interest_plus_ten():
    """Test interest + $10 dominates 2% at high APR"""
    assert minimum_payment(5_000, 22.99) == pytest.approx(105.79, abs=0.01)


def test_minimum_payment_two_percent():
    """Test 2% of balance dominates at low APR"""
    assert minimum_payment(10_000, 6.0) == pytest.approx(200)


def test_minimum_payment_floor():
    """Test $25 floor for small balances"""
    assert minimum_payment(300, 20.0) == 25


@pytest.mark.parametrize(
    "months,expected",
    [
        (math.inf, "Never (payment too low)"),
        (0, "0 months"),
        (1, "1 month"),
        (7.4, "7 months"),
        (12, "1 year"),
        (11.6, "12 months"),
        (23.6, "1 year, 12 months"),
        (2.5, "3 months"),
        (25, "2 years, 1 month"),
        (34.35, "2 years, 10 months"),
    ],
)
def test_format_payoff_time(months, expected):
    assert format_payoff_time(months) == expected
