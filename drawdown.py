from enum import Enum
from typing import Optional

from errors import InvalidInput, MissingParameter, check_amount, check_fraction


class PayoutMode(str, Enum):
    ANNUITY = "annuity"
    FLEXIBLE_WITHDRAWAL = "flexible_withdrawal"


def monthly_payout(capital: float, withdrawal_rate: float) -> float:
    """
    Gross monthly amount from a capital pot: the rate is an annual % of capital
    spread evenly over 12 months. Simplified immediate-annuity approximation;
    no mortality or life expectancy is modelled.
    """
    capital = check_amount(capital, "capital")
    withdrawal_rate = check_fraction(withdrawal_rate, "withdrawal_rate")
    return capital * withdrawal_rate / 12.0


def implied_capital(monthly_amount: float, withdrawal_rate: float) -> float:
    """Inverse of monthly_payout: the pot a given monthly payout implies."""
    monthly_amount = check_amount(monthly_amount, "monthly_amount")
    withdrawal_rate = check_fraction(withdrawal_rate, "withdrawal_rate")
    if withdrawal_rate == 0:
        raise InvalidInput("withdrawal_rate must be positive to imply a capital", "withdrawal_rate")
    return monthly_amount * 12.0 / withdrawal_rate


def payout_rate(mode: PayoutMode, annuity_rate: Optional[float] = None,
                safe_withdrawal_rate: Optional[float] = None) -> float:
    """Pick the rate belonging to the payout mode; the other one is ignored."""
    try:
        mode = PayoutMode(mode)
    except ValueError:
        raise InvalidInput(f"Unknown payout mode {mode!r}", "payout_mode") from None
    if mode is PayoutMode.ANNUITY:
        if annuity_rate is None:
            raise MissingParameter("annuity_rate is required for annuity payout", "annuity_rate")
        return check_fraction(annuity_rate, "annuity_rate")
    if safe_withdrawal_rate is None:
        raise MissingParameter("safe_withdrawal_rate is required for flexible withdrawal",
                               "safe_withdrawal_rate")
    return check_fraction(safe_withdrawal_rate, "safe_withdrawal_rate")
