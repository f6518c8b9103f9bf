"""Debt consolidation analysis - compare existing debts against one consolidation loan"""

import math
import uuid
from typing import Dict, Iterator, List, Optional, Tuple
from fincalc_gateway.domain.amortization import monthly_payment_for_months
from fincalc_gateway.domain.models import (
    CalculationResult,
    ConsolidatedScenario,
    CurrentScenario,
    Debt,
    Savings,
)
from fincalc_gateway.domain.payoff import payoff

# Credit score bucket label -> (min APR, max APR) in percent
CONSOLIDATION_APR_RANGES: Dict[str, Tuple[float, float]] = {
    "800+": (6.0, 12.0),
    "750-799": (8.0, 14.0),
    "700-749": (10.0, 16.0),
    "650-699": (12.0, 18.0),
    "600-649": (15.0, 22.0),
    "550-599": (18.0, 25.0),
    "below-550": (22.0, 30.0),
}
DEFAULT_APR_RANGE: Tuple[float, float] = (10.0, 16.0)


def consolidation_rate_range(credit_score: str) -> Tuple[float, float]:
    return CONSOLIDATION_APR_RANGES.get(credit_score, DEFAULT_APR_RANGE)


def estimated_consolidation_rate(credit_score: str) -> float:
    """Midpoint of the bucket's APR range"""
    min_rate, max_rate = consolidation_rate_range(credit_score)
    return (min_rate + max_rate) / 2


def analyze_consolidation(
    debts: List[Debt],
    credit_score: str,
    loan_term_months: int,
    origination_fee_percent: float,
) -> Optional[CalculationResult]:
    """
    Compare paying existing debts as-is against a single consolidation loan.

    Current scenario:
    - Payoff time is the slowest debt's payoff time
    - Any debt whose payment never covers its interest makes the scenario infinite
    - Annual fees are prorated over the payoff time into interest and cost

    Consolidated scenario:
    - Rate is the midpoint of the credit bucket's APR range
    - Origination fee is financed on top of the combined balance
    - APR is back-solved from total cost so the fee is reflected

    Returns:
        None for an empty debt list
    """
    if not debts:
        return None

    total_balance = sum(debt.balance for debt in debts)
    total_monthly_payment = sum(debt.monthly_payment for debt in debts)
    total_annual_fees = sum(debt.annual_fee for debt in debts)

    weighted_avg_rate = (
        sum(debt.interest_rate * debt.balance for debt in debts) / total_balance
        if total_balance
        else math.nan
    )

    # Current scenario
    total_interest = 0.0
    max_payoff_time = 0.0
    for debt in debts:
        result = payoff(debt.balance, debt.interest_rate, debt.monthly_payment)
        if not result.pays_off:
            max_payoff_time = math.inf
            total_interest = math.inf
        elif not math.isinf(max_payoff_time):
            max_payoff_time = max(max_payoff_time, result.months_to_payoff)
            total_interest += result.total_interest

    if math.isinf(max_payoff_time):
        prorated_fees = math.inf
    else:
        prorated_fees = total_annual_fees * (max_payoff_time / 12)

    # Consolidation loan
    estimated_rate = estimated_consolidation_rate(credit_score)
    loan_amount = total_balance + total_balance * (origination_fee_percent / 100)
    consolidated_payment = monthly_payment_for_months(loan_amount, estimated_rate, loan_term_months)
    consolidated_total_cost = consolidated_payment * loan_term_months
    consolidated_interest = consolidated_total_cost - total_balance
    apr = ((consolidated_total_cost / total_balance) ** (12 / loan_term_months) - 1) * 12 * 100 if total_balance else math.nan

    return CalculationResult(
        current_scenario=CurrentScenario(
            total_monthly_payment=total_monthly_payment,
            total_balance=total_balance,
            weighted_avg_rate=weighted_avg_rate,
            total_payoff_time=max_payoff_time,
            total_interest=total_interest + prorated_fees,
            total_cost=total_balance + total_interest + prorated_fees,
        ),
        consolidated_scenario=ConsolidatedScenario(
            monthly_payment=consolidated_payment,
            total_interest=consolidated_interest,
            total_cost=consolidated_total_cost,
            payoff_time=loan_term_months,
            apr=apr,
        ),
        savings=Savings(
            monthly_payment=total_monthly_payment - consolidated_payment,
            total_interest=total_interest - consolidated_interest,
            total_cost=(total_balance + total_interest) - consolidated_total_cost,
            time_months=max_payoff_time - loan_term_months,
        ),
    )


def generate_debt_id() -> str:
    return uuid.uuid4().hex[:9]


class DebtPortfolio:
    """Ordered, user-managed collection of debts"""

    def __init__(self, debts: Optional[List[Debt]] = None):
        self._debts: List[Debt] = list(debts or [])

    @classmethod
    def default(cls) -> "DebtPortfolio":
        """Two example credit cards shown when the calculator opens"""
        return cls(
            [
                Debt(
                    id=generate_debt_id(),
                    name="Credit Card 1",
                    balance=8000,
                    interest_rate=22.99,
                    monthly_payment=250,
                    annual_fee=95,
                ),
                Debt(
                    id=generate_debt_id(),
                    name="Credit Card 2",
                    balance=4500,
                    interest_rate=21.24,
                    monthly_payment=150,
                    annual_fee=0,
                ),
            ]
        )

    def __iter__(self) -> Iterator[Debt]:
        return iter(self._debts)

    def __len__(self) -> int:
        return len(self._debts)

    @property
    def debts(self) -> List[Debt]:
        return list(self._debts)

    def add(
        self,
        name: Optional[str] = None,
        balance: float = 0.0,
        interest_rate: float = 0.0,
        monthly_payment: float = 0.0,
        annual_fee: float = 0.0,
    ) -> Debt:
        debt = Debt(
            id=generate_debt_id(),
            name=name or f"Debt {len(self._debts) + 1}",
            balance=balance,
            interest_rate=interest_rate,
            monthly_payment=monthly_payment,
            annual_fee=annual_fee,
        )
        self._debts.append(debt)
        return debt

    def remove(self, debt_id: str) -> None:
        self._debts = [debt for debt in self._debts if debt.id != debt_id]

    def update(self, debt_id: str, **fields) -> Debt:
        """
        Replace fields on one debt in place.

        Raises:
            KeyError: Unknown debt id
            AttributeError: Unknown field name
        """
        for debt in self._debts:
            if debt.id == debt_id:
                for field, value in fields.items():
                    if field == "id" or not hasattr(debt, field):
                        raise AttributeError(f"Debt has no editable field {field!r}")
                    setattr(debt, field, value)
                return debt
        raise KeyError(debt_id)

    def analyze(self, credit_score: str, loan_term_months: int, origination_fee_percent: float) -> Optional[CalculationResult]:
        return analyze_consolidation(self._debts, credit_score, loan_term_months, origination_fee_percent)
