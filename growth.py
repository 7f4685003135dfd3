"""
Compounding with monthly contributions.

Convention: the monthly rate is annual_rate / 12 (simple division, not the
geometric 12th root). Contributions are paid at the end of each month, the
initial lump sum compounds from month 0.
"""

import logging
from dataclasses import dataclass

import numpy as np

from config import MAX_HORIZON_YEARS
from errors import InvalidInput, InvalidRange, check_amount, check_number

logger = logging.getLogger(__name__)


def _check_years(years) -> float:
    years = check_amount(years, "years")
    if years > MAX_HORIZON_YEARS:
        raise InvalidRange(f"Investment period too long: {years} years (max {MAX_HORIZON_YEARS})", "years")
    return years


def _check_rate(annual_rate, field="annual_rate") -> float:
    r = check_number(annual_rate, field)
    if r <= -1:
        raise InvalidInput(f"{field} must be greater than -100%, got {r}", field)
    return r


def future_value(initial_capital: float, monthly_contribution: float, annual_rate: float, years: float) -> float:
    initial_capital = check_amount(initial_capital, "initial_capital")
    monthly_contribution = check_amount(monthly_contribution, "monthly_contribution")
    annual_rate = _check_rate(annual_rate)
    years = _check_years(years)

    monthly_rate = annual_rate / 12.0
    months = years * 12
    if monthly_rate == 0:
        return initial_capital + monthly_contribution * months
    growth = (1 + monthly_rate) ** months
    return initial_capital * growth + monthly_contribution * ((growth - 1) / monthly_rate)


def annuity_factor(annual_rate: float, years: float) -> float:
    """Future value of 1/month paid for `years` (ordinary annuity)."""
    monthly_rate = _check_rate(annual_rate) / 12.0
    months = _check_years(years) * 12
    if monthly_rate == 0:
        return months
    return ((1 + monthly_rate) ** months - 1) / monthly_rate


def required_monthly_contribution(target_capital: float, initial_capital: float,
                                  annual_rate: float, years: float) -> float:
    """Monthly saving needed so that future_value(...) reaches target_capital."""
    target_capital = check_amount(target_capital, "target_capital")
    initial_capital = check_amount(initial_capital, "initial_capital")
    lump = future_value(initial_capital, 0.0, annual_rate, years)
    if lump >= target_capital:
        return 0.0
    factor = annuity_factor(annual_rate, years)
    if factor <= 0:
        raise InvalidRange("No time left to save towards the target", "years")
    return (target_capital - lump) / factor


def real_value(amount: float, inflation_rate: float, years: float) -> float:
    """Express a future amount in today's money."""
    amount = check_number(amount, "amount")
    inflation_rate = _check_rate(inflation_rate, "inflation_rate")
    years = _check_years(years)
    return amount / (1 + inflation_rate) ** years


@dataclass(frozen=True)
class Accumulation:
    capital: float
    tax_paid: float
    capital_by_year: np.ndarray   # index 0 = start, last = end of horizon
    tax_by_year: np.ndarray       # tax settled within each year (index 0 is always 0)


def accumulate(initial_capital: float, monthly_contribution: float, pre_tax_rate: float,
               years: float, tax_rate: float = 0.0) -> Accumulation:
    """
    Month-by-month roll-forward. Each month's positive gain is taxed at
    tax_rate and the rest is reinvested (Abgeltungssteuer on accrual);
    losses are not taxed. With tax_rate == 0 this reproduces future_value.
    """
    capital = check_amount(initial_capital, "initial_capital")
    contribution = check_amount(monthly_contribution, "monthly_contribution")
    pre_tax_rate = _check_rate(pre_tax_rate, "pre_tax_rate")
    tax_rate = check_amount(tax_rate, "tax_rate")
    if tax_rate > 1:
        raise InvalidInput(f"tax_rate must be a fraction in [0, 1], got {tax_rate}", "tax_rate")
    years = _check_years(years)

    months = int(round(years * 12))
    n_years = -(-months // 12)
    capital_by_year = np.zeros(n_years + 1)
    tax_by_year = np.zeros(n_years + 1)
    capital_by_year[0] = capital

    monthly_rate = pre_tax_rate / 12.0
    total_tax = 0.0
    for m in range(1, months + 1):
        gain = capital * monthly_rate
        tax = max(0.0, gain) * tax_rate
        capital = capital + gain - tax + contribution
        total_tax += tax
        year = (m - 1) // 12 + 1
        tax_by_year[year] += tax
        capital_by_year[year] = capital

    logger.debug("accumulate: %d months at %.4f pre-tax -> capital=%.2f tax=%.2f",
                 months, pre_tax_rate, capital, total_tax)
    return Accumulation(capital=capital, tax_paid=total_tax,
                        capital_by_year=capital_by_year, tax_by_year=tax_by_year)
