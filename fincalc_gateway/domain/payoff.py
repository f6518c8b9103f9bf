"""Credit card payoff solver for revolving balances under a fixed payment"""

import math
from fincalc_gateway.domain.models import PayoffResult

# Statement minimum payment policy
MINIMUM_PAYMENT_FLOOR = 25.0
MINIMUM_PAYMENT_BALANCE_SHARE = 0.02
MINIMUM_PAYMENT_PRINCIPAL_ADDON = 10.0


def payoff(balance: float, apr_percent: float, monthly_payment: float) -> PayoffResult:
    """
    Solve months-to-payoff in closed form.

    months = −ln(1 − balance·r / payment) / ln(1 + r)

    Returns:
        All-zero result when there is no balance or no payment.
        Infinite months/interest/total when payment ≤ the first month's interest.
    """
    if balance <= 0 or monthly_payment <= 0:
        return PayoffResult(
            months_to_payoff=0.0,
            total_interest=0.0,
            total_paid=0.0,
            monthly_interest_charge=0.0,
        )

    monthly_rate = apr_percent / 100 / 12
    monthly_interest_charge = balance * monthly_rate

    if monthly_payment <= monthly_interest_charge:
        return PayoffResult(
            months_to_payoff=math.inf,
            total_interest=math.inf,
            total_paid=math.inf,
            monthly_interest_charge=monthly_interest_charge,
        )

    if monthly_rate == 0:
        months = balance / monthly_payment
    else:
        months = -math.log(1 - (balance * monthly_rate) / monthly_payment) / math.log(1 + monthly_rate)

    total_paid = monthly_payment * months

    return PayoffResult(
        months_to_payoff=months,
        total_interest=total_paid - balance,
        total_paid=total_paid,
        monthly_interest_charge=monthly_interest_charge,
    )


def minimum_payment(balance: float, apr_percent: float) -> float:
    """Greatest of $25, 2% of balance, or one month's interest plus $10"""
    percentage_payment = balance * MINIMUM_PAYMENT_BALANCE_SHARE
    interest_payment = (balance * (apr_percent / 100) / 12) + MINIMUM_PAYMENT_PRINCIPAL_ADDON
    return max(MINIMUM_PAYMENT_FLOOR, max(percentage_payment, interest_payment))


def format_payoff_time(months: float) -> str:
    """Human readable payoff time, e.g. '2 years, 9 months'"""
    if math.isinf(months) or math.isnan(months):
        return "Never (payment too low)"
    if months <= 0:
        return "0 months"

    years = int(months // 12)
    # Half-up rounding; a remainder such as 11.6 reads as "12 months"
    remaining_months = math.floor(months % 12 + 0.5)

    year_text = f"{years} year{'s' if years != 1 else ''}"
    month_text = f"{remaining_months} month{'s' if remaining_months != 1 else ''}"

    if years == 0:
        return month_text
    if remaining_months == 0:
        return year_text
    return f"{year_text}, {month_text}"
