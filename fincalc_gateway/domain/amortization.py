"""Fixed-rate installment loan math (mortgages, auto loans, consolidation loans)"""

from fincalc_gateway.domain.models import LoanQuote


def monthly_payment_for_months(principal: float, annual_rate_percent: float, term_months: float) -> float:
    """
    Standard annuity payment: P·r·(1+r)^n / ((1+r)^n − 1).

    A zero rate falls back to straight-line principal / n. Principal is not
    bounds-checked; a negative principal yields a negative payment.
    """
    monthly_rate = annual_rate_percent / 100 / 12

    if monthly_rate == 0:
        return principal / term_months

    growth = (1 + monthly_rate) ** term_months
    return principal * (monthly_rate * growth) / (growth - 1)


def monthly_payment(principal: float, annual_rate_percent: float, term_years: float) -> float:
    """Monthly payment for a loan whose term is given in years"""
    return monthly_payment_for_months(principal, annual_rate_percent, term_years * 12)


def total_interest(monthly_payment: float, term_years: float, principal: float) -> float:
    """Interest paid over the full term (negative if the payment underestimates principal)"""
    return (monthly_payment * term_years * 12) - principal


def quote_loan(loan_amount: float, annual_rate_percent: float, term_years: float) -> LoanQuote:
    """Payment and interest summary for a fixed-rate loan"""
    payment = monthly_payment(loan_amount, annual_rate_percent, term_years)

    return LoanQuote(
        loan_amount=loan_amount,
        interest_rate=annual_rate_percent,
        term_years=term_years,
        monthly_payment=payment,
        total_interest=total_interest(payment, term_years, loan_amount),
    )
