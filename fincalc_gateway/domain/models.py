"""Domain models - pure Python dataclasses representing calculator entities"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class RateObservation:
    """Single most-recent value of a provider rate series"""

    series_id: str
    value: float
    fetched_at: datetime


@dataclass
class MarketRates:
    """Live market rates in percent"""

    prime_rate: float
    mortgage30: float
    mortgage15: float


@dataclass
class CachedRates:
    """Market rates with their cache validity window"""

    rates: MarketRates
    last_updated: datetime
    expires_at: datetime
    error: Optional[str] = None
    # Series whose value is a fallback constant rather than a provider observation
    fallback_series: List[str] = field(default_factory=list)

    def is_valid(self, now: datetime) -> bool:
        return now < self.expires_at

    def is_live(self, series_id: str) -> bool:
        return self.error is None and series_id not in self.fallback_series


@dataclass(frozen=True)
class CreditRange:
    """Credit score bucket, bounds inclusive"""

    min: int
    max: int
    label: str
    description: str


@dataclass
class RateData:
    """Representative rates (percent) for a credit score"""

    mortgage_rate: float
    auto_new_rate: float
    auto_used_rate: float


@dataclass
class AutoRates:
    """Auto loan rates (percent) produced by an auto rate model"""

    auto_new_rate: float
    auto_used_rate: float


@dataclass
class LoanQuote:
    """Fixed-rate installment loan summary"""

    loan_amount: float
    interest_rate: float
    term_years: float
    monthly_payment: float
    total_interest: float


@dataclass
class PayoffResult:
    """Revolving balance payoff under a fixed monthly payment.

    months_to_payoff, total_interest and total_paid are math.inf when the
    payment never outpaces the accruing interest.
    """

    months_to_payoff: float
    total_interest: float
    total_paid: float
    monthly_interest_charge: float

    @property
    def pays_off(self) -> bool:
        return not math.isinf(self.months_to_payoff)


@dataclass
class Debt:
    """Existing debt considered for consolidation"""

    id: str
    name: str
    balance: float
    interest_rate: float
    monthly_payment: float
    annual_fee: float = 0.0


@dataclass
class CurrentScenario:
    total_monthly_payment: float
    total_balance: float
    weighted_avg_rate: float
    total_payoff_time: float
    total_interest: float
    total_cost: float


@dataclass
class ConsolidatedScenario:
    monthly_payment: float
    total_interest: float
    total_cost: float
    payoff_time: float
    apr: float


@dataclass
class Savings:
    """Current minus consolidated; positive means consolidation helps"""

    monthly_payment: float
    total_interest: float
    total_cost: float
    time_months: float


@dataclass
class CalculationResult:
    """Current debts compared against a single consolidation loan"""

    current_scenario: CurrentScenario
    consolidated_scenario: ConsolidatedScenario
    savings: Savings
