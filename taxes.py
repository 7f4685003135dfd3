"""
German tax treatment of retirement vehicles, simplified.

Two mutually exclusive regimes:
- Ertragsanteil: accumulation is untaxed; at payout only a fixed, age-dependent
  share of each pension payment is taxed at the personal marginal rate.
- Annual capital-gains tax (Abgeltungssteuer): gains are taxed as they accrue
  during accumulation; withdrawals are not taxed again.

All rates are decimal fractions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from errors import InvalidInput, InvalidRange, MissingParameter, check_amount, check_fraction, check_number


class TaxTreatment(str, Enum):
    ERTRAGSANTEIL = "ertragsanteil"
    ANNUAL_CAPITAL_GAINS = "annual_capital_gains"


def as_treatment(treatment) -> TaxTreatment:
    try:
        return TaxTreatment(treatment)
    except ValueError:
        raise InvalidInput(f"Unknown tax treatment {treatment!r}", "tax_treatment") from None


@dataclass(frozen=True)
class Band:
    up_to_age: float  # last payout-start age (inclusive) in this band
    fraction: float   # taxable share of each payment


# § 22 Nr. 1 Satz 3 a) bb) EStG, age at start of the pension
ERTRAGSANTEIL_TABLE: List[Band] = [
    Band(1, 0.59), Band(3, 0.58), Band(5, 0.57), Band(8, 0.56), Band(10, 0.55),
    Band(12, 0.54), Band(14, 0.53), Band(16, 0.52), Band(18, 0.51), Band(20, 0.50),
    Band(22, 0.49), Band(24, 0.48), Band(26, 0.47), Band(27, 0.46), Band(29, 0.45),
    Band(31, 0.44), Band(32, 0.43), Band(34, 0.42), Band(35, 0.41), Band(37, 0.40),
    Band(38, 0.39), Band(40, 0.38), Band(41, 0.37), Band(42, 0.36), Band(44, 0.35),
    Band(45, 0.34), Band(47, 0.33), Band(48, 0.32), Band(49, 0.31), Band(50, 0.30),
    Band(52, 0.29), Band(53, 0.28), Band(54, 0.27), Band(56, 0.26), Band(57, 0.25),
    Band(58, 0.24), Band(59, 0.23), Band(61, 0.22), Band(62, 0.21), Band(63, 0.20),
    Band(64, 0.19), Band(66, 0.18), Band(67, 0.17), Band(68, 0.16), Band(70, 0.15),
    Band(71, 0.14), Band(73, 0.13), Band(74, 0.12), Band(75, 0.11), Band(77, 0.10),
    Band(79, 0.09), Band(80, 0.08), Band(82, 0.07), Band(84, 0.06), Band(87, 0.05),
    Band(91, 0.04), Band(93, 0.03), Band(96, 0.02), Band(float("inf"), 0.01),
]


def ertragsanteil_for_age(age: int) -> float:
    """Statutory taxable share for a pension starting at `age` (0.17 at 67)."""
    age = check_number(age, "payout_start_age")
    if age < 0:
        raise InvalidRange(f"No Ertragsanteil defined for age {age}", "payout_start_age")
    for band in ERTRAGSANTEIL_TABLE:
        if int(age) <= band.up_to_age:
            return band.fraction


def net_accumulation_growth(gross_annual_return: float, tax_rate: float) -> float:
    """Return after annual capital-gains tax. Losses and zero growth are untaxed."""
    gross_annual_return = check_number(gross_annual_return, "gross_annual_return")
    tax_rate = check_fraction(tax_rate, "tax_rate")
    if gross_annual_return <= 0:
        return gross_annual_return
    return gross_annual_return * (1 - tax_rate)


def accumulation_growth(gross_annual_return: float, treatment, tax_rate: float) -> float:
    if as_treatment(treatment) is TaxTreatment.ANNUAL_CAPITAL_GAINS:
        return net_accumulation_growth(gross_annual_return, tax_rate)
    return check_number(gross_annual_return, "gross_annual_return")


def payout_tax(gross_monthly_amount: float, treatment, tax_rate: float,
               ertragsanteil_fraction: Optional[float] = None) -> float:
    gross_monthly_amount = check_amount(gross_monthly_amount, "gross_monthly_amount")
    tax_rate = check_fraction(tax_rate, "tax_rate")
    if as_treatment(treatment) is TaxTreatment.ANNUAL_CAPITAL_GAINS:
        return 0.0
    if ertragsanteil_fraction is None:
        raise MissingParameter("ertragsanteil_fraction is required for Ertragsanteil taxation",
                               "ertragsanteil_fraction")
    fraction = check_fraction(ertragsanteil_fraction, "ertragsanteil_fraction")
    taxable = gross_monthly_amount * fraction
    return taxable * tax_rate


def net_payout(gross_monthly_amount: float, treatment, tax_rate: float,
               ertragsanteil_fraction: Optional[float] = None) -> float:
    gross_monthly_amount = check_amount(gross_monthly_amount, "gross_monthly_amount")
    return gross_monthly_amount - payout_tax(gross_monthly_amount, treatment, tax_rate, ertragsanteil_fraction)
