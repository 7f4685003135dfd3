import numpy as np
import pytest

from costs import project_capital_schedule, total_cost_drag
from errors import InvalidRange
from returns_presets import PRESETS
from simulation import CostAssumptions, PlanInputs, project_scenario
from taxes import TaxTreatment


def _inputs(**overrides):
    base = dict(current_age=40, retirement_age=67, monthly_contribution=400.0, initial_capital=15_000.0,
                annuity_rate=0.03, safe_withdrawal_rate=0.035)
    base.update(overrides)
    return PlanInputs(**base)


@pytest.mark.parametrize("name", list(PRESETS))
def test_schedule_ends_at_final_capital(name):
    vehicle = PRESETS[name]
    df = project_capital_schedule(_inputs(), vehicle.assumptions)
    result = project_scenario(_inputs(), vehicle.assumptions, vehicle.kind)

    assert len(df) == 28
    assert df["age"].iloc[0] == 40 and df["age"].iloc[-1] == 67
    assert df["capital"].iloc[-1] == pytest.approx(result.final_capital, rel=1e-9)
    assert df["contributions"].iloc[-1] == pytest.approx(result.total_contributions)
    assert df["tax_paid"].sum() == pytest.approx(result.tax_during_accumulation)


def test_cost_drag_grows_with_time():
    df = project_capital_schedule(_inputs(), PRESETS["Debeka Fondsgebundene Rente"].assumptions)

    assert df["cost_drag"].iloc[0] == 0.0
    assert np.all(np.diff(df["cost_drag"].values) >= 0)
    assert total_cost_drag(_inputs(), PRESETS["Debeka Fondsgebundene Rente"].assumptions) \
        == pytest.approx(df["cost_drag"].iloc[-1])


def test_no_costs_no_drag():
    free = CostAssumptions(0.05, 0.0, TaxTreatment.ERTRAGSANTEIL, 0.25, 0.17)
    assert total_cost_drag(_inputs(), free) == 0.0


def test_schedule_validates_inputs():
    with pytest.raises(InvalidRange):
        project_capital_schedule(_inputs(retirement_age=40), PRESETS["ETF-Sparplan"].assumptions)
