import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd

from config import DEFAULT_PAYOUT_HORIZON_YEARS
from errors import InvalidInput
from simulation import (
    CostAssumptions,
    PlanInputs,
    ProjectionResult,
    Vehicle,
    VehicleKind,
    project_scenario,
    project_vehicle,
)

logger = logging.getLogger(__name__)

# Metrics where more is better; the winner maximises one of these.
METRICS = ("net_monthly_pension", "gross_monthly_pension", "final_capital", "effective_net_annual_return")

# (label, contribution multiplier, expected return override or None)
STRATEGIES = [
    ("Konservativ", 0.5, 0.04),
    ("Aktuell", 1.0, None),
    ("Aggressiv", 1.5, 0.075),
]


@dataclass(frozen=True)
class ComparisonResult:
    results: Dict[str, ProjectionResult]   # insertion order = vehicle order
    winner: str
    metric: str
    tax_advantage: Optional[float] = None


def clone_inputs(inputs: PlanInputs, **overrides) -> PlanInputs:
    return replace(inputs, **overrides)


def _as_vehicle(item: Union[Vehicle, Tuple[str, CostAssumptions]]) -> Vehicle:
    if isinstance(item, Vehicle):
        return item
    name, assumptions = item
    return Vehicle(name=name, kind=VehicleKind.PRIVATE_PENSION_PLAN, assumptions=assumptions)


def tax_advantage(results: Dict[str, ProjectionResult], higher_tax: str, lower_tax: str) -> float:
    """
    Tax saved by choosing `lower_tax` over `higher_tax`. Never negative: if the
    pair turns out the other way round the saving is reported as 0.
    """
    for name in (higher_tax, lower_tax):
        if name not in results:
            raise InvalidInput(f"Unknown vehicle {name!r} for tax advantage", "tax_advantage_pair")
    delta = results[higher_tax].total_tax_paid - results[lower_tax].total_tax_paid
    return max(0.0, delta)


def compare_vehicles(inputs: PlanInputs,
                     vehicles: Sequence[Union[Vehicle, Tuple[str, CostAssumptions]]],
                     metric: str = "net_monthly_pension",
                     tax_advantage_pair: Optional[Tuple[str, str]] = None,
                     payout_horizon_years: float = DEFAULT_PAYOUT_HORIZON_YEARS,
                     inflation_rate: float = 0.0) -> ComparisonResult:
    """
    vehicles: Vehicle objects or (name, CostAssumptions) pairs
    tax_advantage_pair: (higher-tax name, lower-tax name)
    """
    if metric not in METRICS:
        raise InvalidInput(f"Unsupported metric {metric!r}; choose one of {', '.join(METRICS)}", "metric")
    items: List[Vehicle] = [_as_vehicle(v) for v in vehicles]
    if not items:
        raise InvalidInput("At least one vehicle is required", "vehicles")

    res: Dict[str, ProjectionResult] = {}
    for v in items:
        if v.name in res:
            raise InvalidInput(f"Duplicate vehicle name {v.name!r}", "vehicles")
        res[v.name] = project_vehicle(inputs, v, payout_horizon_years=payout_horizon_years,
                                      inflation_rate=inflation_rate)

    # strict > keeps the first-listed vehicle on ties
    winner = items[0].name
    for name, r in res.items():
        if getattr(r, metric) > getattr(res[winner], metric):
            winner = name

    advantage = None
    if tax_advantage_pair is not None:
        advantage = tax_advantage(res, *tax_advantage_pair)

    logger.debug("compare_vehicles: %d vehicles, winner=%s by %s", len(res), winner, metric)
    return ComparisonResult(results=res, winner=winner, metric=metric, tax_advantage=advantage)


def compare_strategies(inputs: PlanInputs, assumptions: CostAssumptions,
                       kind: VehicleKind = VehicleKind.PRIVATE_PENSION_PLAN,
                       payout_horizon_years: float = DEFAULT_PAYOUT_HORIZON_YEARS) -> pd.DataFrame:
    """
    Conservative / current / aggressive what-ifs around one plan.
    Returns one row per strategy with the % difference in final capital vs "Aktuell".
    """
    rows = []
    for label, contrib_mult, ret in STRATEGIES:
        inputs_v = clone_inputs(inputs, monthly_contribution=inputs.monthly_contribution * contrib_mult)
        assumptions_v = assumptions if ret is None else replace(assumptions, expected_annual_return=ret)
        r = project_scenario(inputs_v, assumptions_v, kind, payout_horizon_years=payout_horizon_years)
        rows.append({
            "strategy": label,
            "monthly_contribution": inputs_v.monthly_contribution,
            "expected_annual_return": assumptions_v.expected_annual_return,
            "final_capital": r.final_capital,
            "net_monthly_pension": r.net_monthly_pension,
            "total_tax_paid": r.total_tax_paid,
        })
    df = pd.DataFrame(rows)
    current = float(df.loc[df["strategy"] == "Aktuell", "final_capital"].iloc[0])
    if current > 0:
        df["difference_pct"] = (df["final_capital"] - current) / current * 100.0
    else:
        df["difference_pct"] = 0.0
    return df
