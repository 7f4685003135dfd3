import pytest

from dashboard import estimated_pension_from_contributions, project_dashboard
from errors import InvalidInput
from growth import future_value


def test_estimated_pension_uses_four_percent_twice():
    capital = future_value(0.0, 100.0, 0.04, 30)
    assert estimated_pension_from_contributions(100.0, 30) == pytest.approx(capital * 0.04 / 12)


@pytest.mark.parametrize("contribution, years", [(0.0, 30), (100.0, 0), (100.0, -3)])
def test_nothing_to_estimate(contribution, years):
    assert estimated_pension_from_contributions(contribution, years) == 0.0


def test_dashboard_totals():
    summary = project_dashboard(
        statutory_pensions={"public": 1_400.0, "zvk_vbl": 250.0},
        monthly_contributions={"private_pension": 200.0, "riester": 0.0, "ruerup": 100.0},
        years_to_retirement=25,
        current_savings={"funds": 12_000.0, "savings": 3_000.0},
    )

    assert summary.statutory_pension == 1_650.0
    assert summary.total_monthly_contribution == 300.0
    assert summary.total_current_savings == 15_000.0
    assert summary.estimated_pensions["riester"] == 0.0
    assert summary.estimated_pensions["ruerup"] == pytest.approx(summary.estimated_pensions["private_pension"] / 2)
    assert summary.total_projected_pension == pytest.approx(1_650.0 + sum(summary.estimated_pensions.values()))


def test_dashboard_rejects_negative_pension():
    with pytest.raises(InvalidInput):
        project_dashboard({"public": -1.0}, {}, 20)
