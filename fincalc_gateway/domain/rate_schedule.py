"""Credit score based rate lookup for mortgage and auto loans"""

import math
from typing import List, Optional, Literal, Protocol
from fincalc_gateway.domain.models import AutoRates, CreditRange, MarketRates, RateData

VehicleType = Literal["new", "used"]

# Ordered ascending by min, contiguous over 300-850
CREDIT_RANGES: List[CreditRange] = [
    CreditRange(300, 579, "Poor (300-579)", "Limited lending options, higher rates"),
    CreditRange(580, 669, "Fair (580-669)", "Some lending options, above-average rates"),
    CreditRange(670, 739, "Good (670-739)", "Good lending options, competitive rates"),
    CreditRange(740, 799, "Very Good (740-799)", "Excellent lending options, good rates"),
    CreditRange(800, 850, "Excellent (800+)", "Best rates and terms available"),
]

# Scores outside 300-850 are reported as the lowest bucket
OUT_OF_RANGE_DEFAULT: CreditRange = CREDIT_RANGES[0]

# (min score, mortgage, auto new, auto used), highest tier first
STATIC_RATE_TABLE = [
    (800, 6.75, 5.2, 6.8),
    (740, 7.1, 6.1, 8.2),
    (670, 7.6, 8.4, 11.1),
    (580, 8.8, 12.8, 16.9),
    (0, 10.5, 18.2, 22.1),
]

MORTGAGE_TERM_ADJUSTMENTS = {
    15: -0.5,
    20: -0.25,
    25: -0.1,
    30: 0.0,
}

# (min score, spread over prime), highest tier first
LIVE_CREDIT_SPREADS = [
    (781, 0.5),
    (661, 2.0),
    (601, 4.0),
    (501, 8.0),
]
LIVE_LOWEST_CREDIT_SPREAD = 12.0
LIVE_LONG_TERM_SPREAD = 1.0
LIVE_USED_CAR_SPREAD = 1.5
LIVE_NEW_CAR_FLOOR = 3.0
LIVE_USED_CAR_FLOOR = 4.5


def base_rates(credit_score: float) -> RateData:
    """Unadjusted static table rates for the score's tier"""
    for min_score, mortgage, auto_new, auto_used in STATIC_RATE_TABLE:
        if credit_score >= min_score:
            return RateData(mortgage_rate=mortgage, auto_new_rate=auto_new, auto_used_rate=auto_used)

    _, mortgage, auto_new, auto_used = STATIC_RATE_TABLE[-1]
    return RateData(mortgage_rate=mortgage, auto_new_rate=auto_new, auto_used_rate=auto_used)


def auto_term_adjustment(loan_term_years: float) -> float:
    """Shorter auto loans price lower, 5 years is the base"""
    if loan_term_years <= 3:
        return -0.3
    elif loan_term_years == 4:
        return -0.15
    elif loan_term_years == 5:
        return 0.0
    elif loan_term_years == 6:
        return 0.25
    elif loan_term_years >= 7:
        return 0.5
    return 0.0


def get_current_rates(
    credit_score: float,
    loan_term_years: Optional[float] = None,
    vehicle_type: Optional[VehicleType] = None,
) -> RateData:
    """
    Current market rates by credit score and loan term.

    Mortgage term adjustment applies when a term is given without a vehicle
    type; auto term adjustment applies to both auto rates when a term and a
    vehicle type are given.
    """
    rates = base_rates(credit_score)

    if loan_term_years and not vehicle_type:
        rates.mortgage_rate += MORTGAGE_TERM_ADJUSTMENTS.get(loan_term_years, 0.0)

    if loan_term_years and vehicle_type:
        adjustment = auto_term_adjustment(loan_term_years)
        rates.auto_new_rate += adjustment
        rates.auto_used_rate += adjustment

    return rates


def credit_range_info(credit_score: float) -> CreditRange:
    """First bucket containing the (truncated) score, OUT_OF_RANGE_DEFAULT otherwise"""
    score = math.floor(credit_score)
    for credit_range in CREDIT_RANGES:
        if credit_range.min <= score <= credit_range.max:
            return credit_range
    return OUT_OF_RANGE_DEFAULT


def credit_range_value(credit_range: CreditRange) -> int:
    """Representative score for a bucket (used as a dropdown value)"""
    return (credit_range.min + credit_range.max) // 2


class AutoRateModel(Protocol):
    """Strategy producing auto loan rates for a borrower"""

    name: str

    def auto_rates(self, credit_score: float, loan_term_years: float, vehicle_type: VehicleType) -> AutoRates:
        ...


class StaticSchedule:
    """Auto rates from the static credit tier table with term adjustment"""

    name = "static"

    def auto_rates(self, credit_score: float, loan_term_years: float, vehicle_type: VehicleType) -> AutoRates:
        rates = get_current_rates(credit_score, loan_term_years, vehicle_type)
        return AutoRates(auto_new_rate=rates.auto_new_rate, auto_used_rate=rates.auto_used_rate)


class LivePrimeDerived:
    """Auto rates priced as prime + credit spread + term spread"""

    name = "live"

    def __init__(self, prime_rate: float):
        self.prime_rate = prime_rate

    @staticmethod
    def credit_spread(credit_score: float) -> float:
        for min_score, spread in LIVE_CREDIT_SPREADS:
            if credit_score >= min_score:
                return spread
        return LIVE_LOWEST_CREDIT_SPREAD

    def auto_rates(self, credit_score: float, loan_term_years: float, vehicle_type: VehicleType) -> AutoRates:
        term_spread = LIVE_LONG_TERM_SPREAD if loan_term_years > 5 else 0.0
        new_car_rate = self.prime_rate + self.credit_spread(credit_score) + term_spread
        used_car_rate = new_car_rate + LIVE_USED_CAR_SPREAD

        return AutoRates(
            auto_new_rate=max(new_car_rate, LIVE_NEW_CAR_FLOOR),
            auto_used_rate=max(used_car_rate, LIVE_USED_CAR_FLOOR),
        )


def select_auto_rate_model(live_rates: Optional[MarketRates]) -> AutoRateModel:
    """Prefer the live prime model when live rates are available"""
    if live_rates is not None:
        return LivePrimeDerived(live_rates.prime_rate)
    return StaticSchedule()


def auto_loan_rate(rates: AutoRates, vehicle_type: VehicleType) -> float:
    return rates.auto_new_rate if vehicle_type == "new" else rates.auto_used_rate
