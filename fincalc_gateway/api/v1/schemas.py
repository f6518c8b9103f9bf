"""Pydantic schemas for API request/response validation"""

import math
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional

from fincalc_gateway.utils.number_format import parse_form_int, parse_formatted_number


def finite_or_none(value: float) -> Optional[float]:
    """JSON has no infinity; non-convergent values are sent as null"""
    return None if math.isinf(value) or math.isnan(value) else value


class FormModel(BaseModel):
    """Calculator form body; numeric fields accept numbers or '35,000' style text"""

    @field_validator("*", mode="before")
    @classmethod
    def parse_form_text(cls, value, info):
        field = cls.model_fields[info.field_name]
        if field.annotation is float and isinstance(value, str):
            return parse_formatted_number(value)
        return value


# Rates


class RatesSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    prime_rate: float
    mortgage30: float
    mortgage15: float


class RatesResponse(BaseModel):
    """Response for GET /api/rates"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    rates: RatesSchema
    last_updated: datetime
    expires_at: datetime
    error: Optional[str] = None


class CreditRangeSchema(BaseModel):
    min: int
    max: int
    label: str
    description: str
    value: int


class LoanQuoteSchema(BaseModel):
    loan_amount: float
    interest_rate: float
    term_years: float
    monthly_payment: float
    total_interest: float
    monthly_payment_formatted: str
    total_interest_formatted: str


# Mortgage


class MortgageRequest(FormModel):
    """Request body for POST /v1/calculators/mortgage"""

    home_price: float = Field(..., description="Purchase price")
    down_payment: float = 0.0
    loan_term_years: float = 30
    credit_score: int = 704

    @field_validator("credit_score", mode="before")
    @classmethod
    def parse_credit_score(cls, value):
        return parse_form_int(value, 704)

    @field_validator("loan_term_years")
    @classmethod
    def default_term(cls, value: float) -> float:
        return value if value > 0 else 30


class MortgageResponse(BaseModel):
    quote: LoanQuoteSchema
    down_payment_percent: Optional[float]
    credit_range: CreditRangeSchema


# Auto loan


class AutoLoanRequest(FormModel):
    """Request body for POST /v1/calculators/auto-loan"""

    vehicle_price: float = Field(..., description="Vehicle price")
    down_payment: float = 0.0
    trade_in_value: float = 0.0
    loan_term_years: float = 5
    credit_score: int = 704
    vehicle_type: Literal["new", "used"] = "new"
    use_live_rates: bool = True

    @field_validator("credit_score", mode="before")
    @classmethod
    def parse_credit_score(cls, value):
        return parse_form_int(value, 704)

    @field_validator("loan_term_years")
    @classmethod
    def default_term(cls, value: float) -> float:
        return value if value > 0 else 5


class AutoLoanResponse(BaseModel):
    quote: LoanQuoteSchema
    down_payment_percent: Optional[float]
    rate_source: Literal["live", "static"]
    rates_error: Optional[str] = None


# Credit card


class CreditCardRequest(FormModel):
    """Request body for POST /v1/calculators/credit-card"""

    balance: float
    apr: float
    monthly_payment: float = 0.0
    payment_strategy: Literal["fixed", "minimum"] = "fixed"


class CreditCardResponse(BaseModel):
    pays_off: bool
    months_to_payoff: Optional[float]
    total_interest: Optional[float]
    total_paid: Optional[float]
    monthly_interest_charge: float
    monthly_payment: float
    minimum_payment: float
    payoff_time: str


# Debt consolidation


class DebtSchema(FormModel):
    id: Optional[str] = None
    name: str = ""
    balance: float = Field(0.0, ge=0)
    interest_rate: float = 0.0
    monthly_payment: float = Field(0.0, ge=0)
    annual_fee: float = Field(0.0, ge=0)


class ConsolidationRequest(FormModel):
    """Request body for POST /v1/calculators/debt-consolidation"""

    debts: List[DebtSchema]
    credit_score: str = "700-749"
    loan_term_months: int = Field(60, gt=0)
    origination_fee_percent: float = Field(0.0, ge=0)


class CurrentScenarioSchema(BaseModel):
    total_monthly_payment: float
    total_balance: float
    weighted_avg_rate: Optional[float]
    total_payoff_time: Optional[float]
    total_interest: Optional[float]
    total_cost: Optional[float]


class ConsolidatedScenarioSchema(BaseModel):
    monthly_payment: float
    total_interest: float
    total_cost: float
    payoff_time: float
    apr: Optional[float]


class SavingsSchema(BaseModel):
    monthly_payment: float
    total_interest: Optional[float]
    total_cost: Optional[float]
    time_months: Optional[float]


class CalculationResultSchema(BaseModel):
    current_scenario: CurrentScenarioSchema
    consolidated_scenario: ConsolidatedScenarioSchema
    savings: SavingsSchema
    pays_off: bool


class ConsolidationResponse(BaseModel):
    """Response for POST /v1/calculators/debt-consolidation; result is null without debts"""

    result: Optional[CalculationResultSchema] = None
