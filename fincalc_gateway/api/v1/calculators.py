"""POST /v1/calculators/* - Mortgage, auto loan, credit card and consolidation calculators"""

import math
import time
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request

from fincalc_gateway.api.v1.schemas import (
    AutoLoanRequest,
    AutoLoanResponse,
    CalculationResultSchema,
    ConsolidatedScenarioSchema,
    ConsolidationRequest,
    ConsolidationResponse,
    CreditCardRequest,
    CreditCardResponse,
    CreditRangeSchema,
    CurrentScenarioSchema,
    LoanQuoteSchema,
    MortgageRequest,
    MortgageResponse,
    SavingsSchema,
    finite_or_none,
)
from fincalc_gateway.api.dependencies import get_rate_cache, get_request_id
from fincalc_gateway.domain.amortization import quote_loan
from fincalc_gateway.domain.consolidation import analyze_consolidation, generate_debt_id
from fincalc_gateway.domain.models import Debt, LoanQuote
from fincalc_gateway.domain.payoff import format_payoff_time, minimum_payment, payoff
from fincalc_gateway.domain.rate_schedule import (
    auto_loan_rate,
    credit_range_info,
    credit_range_value,
    get_current_rates,
    select_auto_rate_model,
)
from fincalc_gateway.infrastructure.rate_cache import FALLBACK_ERROR, PRIME_RATE_SERIES, RateCache
from fincalc_gateway.infrastructure.observability.metrics import record_calculation
from fincalc_gateway.infrastructure.observability.logging import log_calculation
from fincalc_gateway.utils.number_format import format_currency

router = APIRouter()


def down_payment_percent(down_payment: float, price: float) -> Optional[float]:
    return down_payment / price * 100 if price else None


def to_quote_schema(quote: LoanQuote) -> LoanQuoteSchema:
    return LoanQuoteSchema(
        loan_amount=quote.loan_amount,
        interest_rate=quote.interest_rate,
        term_years=quote.term_years,
        monthly_payment=quote.monthly_payment,
        total_interest=quote.total_interest,
        monthly_payment_formatted=format_currency(quote.monthly_payment),
        total_interest_formatted=format_currency(quote.total_interest),
    )


def finish(request: Request, calculator: str, start_time: float, **fields) -> None:
    duration_ms = (time.time() - start_time) * 1000
    record_calculation(calculator)
    log_calculation(get_request_id(request), calculator, duration_ms, **fields)


@router.post("/calculators/mortgage", response_model=MortgageResponse)
def calculate_mortgage(request_body: MortgageRequest, request: Request):
    """
    Mortgage payment from home price, down payment, term and credit score.

    Uses the static rate schedule with the mortgage term adjustment.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        loan_amount = request_body.home_price - request_body.down_payment
        rates = get_current_rates(request_body.credit_score, request_body.loan_term_years)
        quote = quote_loan(loan_amount, rates.mortgage_rate, request_body.loan_term_years)
        credit_range = credit_range_info(request_body.credit_score)

        finish(request, "mortgage", start_time, interest_rate=quote.interest_rate)

        return MortgageResponse(
            quote=to_quote_schema(quote),
            down_payment_percent=down_payment_percent(request_body.down_payment, request_body.home_price),
            credit_range=CreditRangeSchema(
                min=credit_range.min,
                max=credit_range.max,
                label=credit_range.label,
                description=credit_range.description,
                value=credit_range_value(credit_range),
            ),
        )

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/calculators/auto-loan", response_model=AutoLoanResponse)
async def calculate_auto_loan(
    request_body: AutoLoanRequest,
    request: Request,
    rate_cache: RateCache = Depends(get_rate_cache),
):
    """
    Auto loan payment for a new or used vehicle.

    Flow:
    1. Read cached market rates (when live rates are requested)
    2. Price with the live prime model if the prime rate came from the
       provider, otherwise with the static credit tier table
    3. Quote the loan on price minus down payment and trade-in
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        live_rates = None
        rates_error = None
        if request_body.use_live_rates:
            cached = await rate_cache.get_rates()
            if cached.is_live(PRIME_RATE_SERIES):
                live_rates = cached.rates
            else:
                rates_error = cached.error or FALLBACK_ERROR

        model = select_auto_rate_model(live_rates)
        auto_rates = model.auto_rates(
            request_body.credit_score,
            request_body.loan_term_years,
            request_body.vehicle_type,
        )
        interest_rate = auto_loan_rate(auto_rates, request_body.vehicle_type)

        loan_amount = request_body.vehicle_price - request_body.down_payment - request_body.trade_in_value
        quote = quote_loan(loan_amount, interest_rate, request_body.loan_term_years)

        finish(request, "auto_loan", start_time, rate_source=model.name, interest_rate=interest_rate)

        return AutoLoanResponse(
            quote=to_quote_schema(quote),
            down_payment_percent=down_payment_percent(request_body.down_payment, request_body.vehicle_price),
            rate_source=model.name,
            rates_error=rates_error,
        )

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/calculators/credit-card", response_model=CreditCardResponse)
def calculate_credit_card(request_body: CreditCardRequest, request: Request):
    """
    Months and interest to pay off a card balance.

    With the "minimum" strategy the statement minimum payment is used.
    A payment that never covers the monthly interest returns pays_off=false
    and null totals.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        min_payment = minimum_payment(request_body.balance, request_body.apr)
        if request_body.payment_strategy == "minimum":
            payment_amount = min_payment
        else:
            payment_amount = request_body.monthly_payment

        result = payoff(request_body.balance, request_body.apr, payment_amount)

        finish(request, "credit_card", start_time, pays_off=result.pays_off)

        return CreditCardResponse(
            pays_off=result.pays_off,
            months_to_payoff=finite_or_none(result.months_to_payoff),
            total_interest=finite_or_none(result.total_interest),
            total_paid=finite_or_none(result.total_paid),
            monthly_interest_charge=result.monthly_interest_charge,
            monthly_payment=payment_amount,
            minimum_payment=min_payment,
            payoff_time=format_payoff_time(result.months_to_payoff),
        )

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/calculators/debt-consolidation", response_model=ConsolidationResponse)
def calculate_debt_consolidation(request_body: ConsolidationRequest, request: Request):
    """
    Compare current debts against a single consolidation loan.

    Returns a null result when no debts are submitted.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        debts = [
            Debt(
                id=debt.id or generate_debt_id(),
                name=debt.name,
                balance=debt.balance,
                interest_rate=debt.interest_rate,
                monthly_payment=debt.monthly_payment,
                annual_fee=debt.annual_fee,
            )
            for debt in request_body.debts
        ]

        result = analyze_consolidation(
            debts,
            request_body.credit_score,
            request_body.loan_term_months,
            request_body.origination_fee_percent,
        )

        finish(request, "debt_consolidation", start_time, debt_count=len(debts))

        if result is None:
            return ConsolidationResponse(result=None)

        current = result.current_scenario
        consolidated = result.consolidated_scenario
        savings = result.savings

        return ConsolidationResponse(
            result=CalculationResultSchema(
                current_scenario=CurrentScenarioSchema(
                    total_monthly_payment=current.total_monthly_payment,
                    total_balance=current.total_balance,
                    weighted_avg_rate=finite_or_none(current.weighted_avg_rate),
                    total_payoff_time=finite_or_none(current.total_payoff_time),
                    total_interest=finite_or_none(current.total_interest),
                    total_cost=finite_or_none(current.total_cost),
                ),
                consolidated_scenario=ConsolidatedScenarioSchema(
                    monthly_payment=consolidated.monthly_payment,
                    total_interest=consolidated.total_interest,
                    total_cost=consolidated.total_cost,
                    payoff_time=consolidated.payoff_time,
                    apr=finite_or_none(consolidated.apr),
                ),
                savings=SavingsSchema(
                    monthly_payment=savings.monthly_payment,
                    total_interest=finite_or_none(savings.total_interest),
                    total_cost=finite_or_none(savings.total_cost),
                    time_months=finite_or_none(savings.time_months),
                ),
                pays_off=not math.isinf(current.total_payoff_time),
            )
        )

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
