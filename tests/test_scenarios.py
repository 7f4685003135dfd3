import pytest

from errors import InvalidInput
from returns_presets import COMPARISON, PRESETS
from scenarios import clone_inputs, compare_strategies, compare_vehicles, tax_advantage
from simulation import CostAssumptions, PlanInputs, Vehicle, VehicleKind
from taxes import TaxTreatment


def _inputs(**overrides):
    base = dict(current_age=35, retirement_age=67, monthly_contribution=500.0, initial_capital=0.0,
                annuity_rate=0.04, safe_withdrawal_rate=0.04)
    base.update(overrides)
    return PlanInputs(**base)


def _assumptions(ret=0.05):
    return CostAssumptions(ret, 0.01, TaxTreatment.ERTRAGSANTEIL, 0.25, 0.17)


def test_winner_has_best_net_pension():
    vehicles = [PRESETS[name] for name in COMPARISON]
    comparison = compare_vehicles(_inputs(), vehicles)

    assert list(comparison.results) == COMPARISON
    best = comparison.results[comparison.winner].net_monthly_pension
    assert all(best >= r.net_monthly_pension for r in comparison.results.values())
    assert comparison.metric == "net_monthly_pension"
    assert comparison.tax_advantage is None


def test_guaranteed_rate_insurance_never_wins_default_comparison():
    comparison = compare_vehicles(_inputs(), [PRESETS[name] for name in COMPARISON])
    assert comparison.winner != "Klassische Rentenversicherung"


def test_ties_go_to_first_listed():
    same = _assumptions()
    comparison = compare_vehicles(_inputs(), [("B", same), ("A", same), ("C", same)])
    assert comparison.winner == "B"


def test_pairs_are_treated_as_private_pension_plans():
    comparison = compare_vehicles(_inputs(), [("low", _assumptions(0.03)), ("high", _assumptions(0.07))])
    assert comparison.winner == "high"


def test_other_metric():
    low_cost_fund = Vehicle("fund", VehicleKind.DIRECT_FUND,
                            CostAssumptions(0.07, 0.002, TaxTreatment.ANNUAL_CAPITAL_GAINS, 0.26375))
    comparison = compare_vehicles(_inputs(), [("policy", _assumptions(0.05)), low_cost_fund],
                                  metric="final_capital")
    assert comparison.winner == "fund"


def test_tax_advantage_is_never_negative():
    comparison = compare_vehicles(
        _inputs(), [PRESETS["ETF-Sparplan"], PRESETS["Debeka Fondsgebundene Rente"]],
        tax_advantage_pair=("ETF-Sparplan", "Debeka Fondsgebundene Rente"),
    )
    res = comparison.results
    etf_tax = res["ETF-Sparplan"].total_tax_paid
    debeka_tax = res["Debeka Fondsgebundene Rente"].total_tax_paid

    assert comparison.tax_advantage == pytest.approx(max(0.0, etf_tax - debeka_tax))
    forward = tax_advantage(res, "ETF-Sparplan", "Debeka Fondsgebundene Rente")
    backward = tax_advantage(res, "Debeka Fondsgebundene Rente", "ETF-Sparplan")
    assert forward >= 0 and backward >= 0
    assert forward + backward == pytest.approx(abs(etf_tax - debeka_tax))


def test_tax_advantage_unknown_vehicle():
    comparison = compare_vehicles(_inputs(), [("a", _assumptions())])
    with pytest.raises(InvalidInput):
        tax_advantage(comparison.results, "a", "b")


@pytest.mark.parametrize("vehicles, metric", [
    ([], "net_monthly_pension"),
    ([("a", None), ("a", None)], "net_monthly_pension"),
    ([("a", None)], "total_tax_paid"),
])
def test_invalid_comparisons(vehicles, metric):
    vehicles = [(name, _assumptions()) for name, _ in vehicles]
    with pytest.raises(InvalidInput):
        compare_vehicles(_inputs(), vehicles, metric=metric)


def test_errors_propagate_from_engine():
    with pytest.raises(ValueError):
        compare_vehicles(_inputs(retirement_age=30), [("a", _assumptions())])


def test_clone_inputs_leaves_original_alone():
    base = _inputs()
    more = clone_inputs(base, monthly_contribution=800.0)
    assert more.monthly_contribution == 800.0
    assert base.monthly_contribution == 500.0


def test_strategies():
    df = compare_strategies(_inputs(), _assumptions(0.06))

    assert list(df["strategy"]) == ["Konservativ", "Aktuell", "Aggressiv"]
    assert list(df["monthly_contribution"]) == [250.0, 500.0, 750.0]
    assert list(df["expected_annual_return"]) == [0.04, 0.06, 0.075]
    row = df.set_index("strategy")
    assert row.loc["Aktuell", "difference_pct"] == 0.0
    assert row.loc["Konservativ", "difference_pct"] < 0
    assert row.loc["Aggressiv", "difference_pct"] > 0
