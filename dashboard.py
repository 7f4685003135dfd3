"""
Dashboard KPIs: statutory pensions plus what the current private contributions
would add at retirement.

Statutory sources are monthly amounts at 67 as stated in the pension notices
(public, civil-servant, professional, ZVK/VBL). Contribution streams
(private pension, Riester, Rürup, occupational) are compounded to retirement
and converted with a flat withdrawal rate.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from drawdown import monthly_payout
from errors import check_amount, check_number
from growth import future_value

DASHBOARD_RETURN = 0.04
DASHBOARD_WITHDRAWAL_RATE = 0.04


@dataclass(frozen=True)
class DashboardSummary:
    years_to_retirement: int
    total_current_savings: float
    total_monthly_contribution: float
    statutory_pension: float
    estimated_pensions: Dict[str, float] = field(default_factory=dict)
    total_projected_pension: float = 0.0


def estimated_pension_from_contributions(monthly_contribution: float, years: float,
                                         annual_return: float = DASHBOARD_RETURN,
                                         withdrawal_rate: float = DASHBOARD_WITHDRAWAL_RATE) -> float:
    monthly_contribution = check_amount(monthly_contribution, "monthly_contribution")
    years = check_number(years, "years_to_retirement")
    if monthly_contribution == 0 or years <= 0:
        return 0.0
    capital = future_value(0.0, monthly_contribution, annual_return, years)
    return monthly_payout(capital, withdrawal_rate)


def project_dashboard(statutory_pensions: Mapping[str, float],
                      monthly_contributions: Mapping[str, float],
                      years_to_retirement: int,
                      annual_return: float = DASHBOARD_RETURN,
                      withdrawal_rate: float = DASHBOARD_WITHDRAWAL_RATE,
                      current_savings: Optional[Mapping[str, float]] = None) -> DashboardSummary:
    statutory = sum(check_amount(v, f"statutory_pensions[{k}]") for k, v in statutory_pensions.items())
    estimates = {
        k: estimated_pension_from_contributions(v, years_to_retirement, annual_return, withdrawal_rate)
        for k, v in monthly_contributions.items()
    }
    savings = sum(check_amount(v, f"current_savings[{k}]") for k, v in (current_savings or {}).items())
    return DashboardSummary(
        years_to_retirement=years_to_retirement,
        total_current_savings=savings,
        total_monthly_contribution=sum(float(v) for v in monthly_contributions.values()),
        statutory_pension=statutory,
        estimated_pensions=estimates,
        total_projected_pension=statutory + sum(estimates.values()),
    )
