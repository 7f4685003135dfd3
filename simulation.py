"""
Deterministic projection of one retirement vehicle: accumulate to the payout
start, convert the pot into a monthly pension, apply the vehicle's tax regime.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config import DEFAULT_PAYOUT_HORIZON_YEARS
from drawdown import PayoutMode, monthly_payout, payout_rate
from errors import InvalidInput, InvalidRange, check_amount, check_fraction, check_number
from growth import accumulate, future_value, real_value, required_monthly_contribution
from taxes import TaxTreatment, accumulation_growth, as_treatment, payout_tax

logger = logging.getLogger(__name__)


class VehicleKind(str, Enum):
    FUND_LINKED_INSURANCE = "fund_linked_insurance"          # e.g. Debeka fondsgebundene Rente
    DIRECT_FUND = "direct_fund"                              # ETF savings plan
    GUARANTEED_RATE_INSURANCE = "guaranteed_rate_insurance"  # klassische Rentenversicherung
    PRIVATE_PENSION_PLAN = "private_pension_plan"


@dataclass(frozen=True)
class PlanInputs:
    current_age: int
    retirement_age: int
    monthly_contribution: float
    initial_capital: float = 0.0
    target_capital: Optional[float] = None
    payout_start_age: Optional[int] = None   # None = retirement_age
    payout_end_age: Optional[int] = None
    payout_mode: PayoutMode = PayoutMode.ANNUITY
    annuity_rate: Optional[float] = None
    safe_withdrawal_rate: Optional[float] = None

    @classmethod
    def from_term(cls, start_age: int, term_years: int, monthly_contribution: float, **kwargs) -> "PlanInputs":
        return cls(current_age=start_age, retirement_age=start_age + term_years,
                   monthly_contribution=monthly_contribution, **kwargs)

    @property
    def years(self) -> int:
        return self.retirement_age - self.current_age


@dataclass(frozen=True)
class CostAssumptions:
    expected_annual_return: float
    annual_cost_rate: float               # TER + management fee
    tax_treatment: TaxTreatment
    tax_rate: float                       # personal marginal rate or Abgeltungssteuer
    ertragsanteil_fraction: Optional[float] = None

    @property
    def pre_tax_return(self) -> float:
        return self.expected_annual_return - self.annual_cost_rate


@dataclass(frozen=True)
class Vehicle:
    name: str
    kind: VehicleKind
    assumptions: CostAssumptions


@dataclass(frozen=True)
class ProjectionResult:
    final_capital: float
    gross_monthly_pension: float
    net_monthly_pension: float
    total_tax_paid: float
    effective_net_annual_return: float
    years: int
    total_contributions: float
    investment_gain: float
    tax_during_accumulation: float
    tax_during_payout: float
    real_net_monthly_pension: float
    target_shortfall: Optional[float] = None
    required_monthly_contribution: Optional[float] = None


def validate_inputs(inputs: PlanInputs) -> int:
    """Check age ordering and money fields; returns the accumulation years."""
    current_age = check_amount(inputs.current_age, "current_age")
    retirement_age = check_number(inputs.retirement_age, "retirement_age")
    if retirement_age <= current_age:
        raise InvalidRange(
            f"retirement_age ({inputs.retirement_age}) must be after current_age ({inputs.current_age})",
            "retirement_age")
    if inputs.payout_start_age is not None and inputs.payout_start_age != inputs.retirement_age:
        raise InvalidRange(
            f"payout_start_age ({inputs.payout_start_age}) disagrees with retirement_age "
            f"({inputs.retirement_age})", "payout_start_age")
    start = inputs.retirement_age if inputs.payout_start_age is None else inputs.payout_start_age
    if inputs.payout_end_age is not None and inputs.payout_end_age <= start:
        raise InvalidRange(
            f"payout_end_age ({inputs.payout_end_age}) must be after payout start ({start})",
            "payout_end_age")
    check_amount(inputs.monthly_contribution, "monthly_contribution")
    check_amount(inputs.initial_capital, "initial_capital")
    if inputs.target_capital is not None:
        check_amount(inputs.target_capital, "target_capital")
    return inputs.years


def validate_assumptions(assumptions: CostAssumptions) -> None:
    check_number(assumptions.expected_annual_return, "expected_annual_return")
    check_amount(assumptions.annual_cost_rate, "annual_cost_rate")
    as_treatment(assumptions.tax_treatment)
    check_fraction(assumptions.tax_rate, "tax_rate")
    if assumptions.ertragsanteil_fraction is not None:
        check_fraction(assumptions.ertragsanteil_fraction, "ertragsanteil_fraction")


def as_kind(kind) -> VehicleKind:
    try:
        return VehicleKind(kind)
    except ValueError:
        raise InvalidInput(f"Unknown vehicle kind {kind!r}", "kind") from None


def vehicle_payout_rate(inputs: PlanInputs, kind: VehicleKind) -> float:
    """Insurance wrappers pay out per the plan's mode; a direct fund can only be drawn down."""
    kind = as_kind(kind)
    if kind in (VehicleKind.FUND_LINKED_INSURANCE,
                VehicleKind.GUARANTEED_RATE_INSURANCE,
                VehicleKind.PRIVATE_PENSION_PLAN):
        return payout_rate(inputs.payout_mode, inputs.annuity_rate, inputs.safe_withdrawal_rate)
    if kind is VehicleKind.DIRECT_FUND:
        return payout_rate(PayoutMode.FLEXIBLE_WITHDRAWAL, safe_withdrawal_rate=inputs.safe_withdrawal_rate)
    raise InvalidInput(f"Unknown vehicle kind {kind!r}", "kind")


def project_scenario(inputs: PlanInputs, assumptions: CostAssumptions,
                     kind: VehicleKind = VehicleKind.PRIVATE_PENSION_PLAN,
                     payout_horizon_years: float = DEFAULT_PAYOUT_HORIZON_YEARS,
                     inflation_rate: float = 0.0) -> ProjectionResult:
    years = validate_inputs(inputs)
    validate_assumptions(assumptions)
    payout_horizon_years = check_amount(payout_horizon_years, "payout_horizon_years")
    treatment = as_treatment(assumptions.tax_treatment)

    # 1) net of costs, then of Abgeltungssteuer where gains are taxed on accrual
    pre_tax_rate = assumptions.pre_tax_return
    net_rate = accumulation_growth(pre_tax_rate, treatment, assumptions.tax_rate)

    # 2-3) accumulate
    final_capital = future_value(inputs.initial_capital, inputs.monthly_contribution, net_rate, years)

    # 4) pot -> pension
    rate = vehicle_payout_rate(inputs, kind)
    gross = monthly_payout(final_capital, rate)

    # 5-6) tax
    if treatment is TaxTreatment.ERTRAGSANTEIL:
        monthly_tax = payout_tax(gross, treatment, assumptions.tax_rate, assumptions.ertragsanteil_fraction)
        tax_accumulation = 0.0
        tax_payout = monthly_tax * 12 * payout_horizon_years
    else:
        monthly_tax = 0.0
        tax_accumulation = accumulate(inputs.initial_capital, inputs.monthly_contribution,
                                      pre_tax_rate, years, assumptions.tax_rate).tax_paid
        tax_payout = 0.0
    net = gross - monthly_tax

    total_contributions = inputs.initial_capital + inputs.monthly_contribution * years * 12

    shortfall = required = None
    if inputs.target_capital is not None:
        shortfall = max(0.0, inputs.target_capital - final_capital)
        required = required_monthly_contribution(inputs.target_capital, inputs.initial_capital, net_rate, years)

    result = ProjectionResult(
        final_capital=final_capital,
        gross_monthly_pension=gross,
        net_monthly_pension=net,
        total_tax_paid=tax_accumulation + tax_payout,
        effective_net_annual_return=net_rate,
        years=years,
        total_contributions=total_contributions,
        investment_gain=final_capital - total_contributions,
        tax_during_accumulation=tax_accumulation,
        tax_during_payout=tax_payout,
        real_net_monthly_pension=real_value(net, inflation_rate, years),
        target_shortfall=shortfall,
        required_monthly_contribution=required,
    )
    logger.debug("project_scenario kind=%s years=%d net_rate=%.5f capital=%.2f net_pension=%.2f",
                 as_kind(kind).value, years, net_rate, final_capital, net)
    return result


def project_vehicle(inputs: PlanInputs, vehicle: Vehicle, **kwargs) -> ProjectionResult:
    return project_scenario(inputs, vehicle.assumptions, vehicle.kind, **kwargs)
