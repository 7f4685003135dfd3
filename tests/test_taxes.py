import pytest

from errors import InvalidInput, InvalidRange, MissingParameter
from taxes import (
    TaxTreatment,
    accumulation_growth,
    ertragsanteil_for_age,
    net_accumulation_growth,
    net_payout,
    payout_tax,
)


@pytest.mark.parametrize("age, fraction", [
    (0, 0.59), (30, 0.44), (60, 0.22), (61, 0.22), (63, 0.20),
    (65, 0.18), (66, 0.18), (67, 0.17), (70, 0.15), (97, 0.01),
])
def test_ertragsanteil_table(age, fraction):
    assert ertragsanteil_for_age(age) == fraction


def test_ertragsanteil_outside_table():
    with pytest.raises(InvalidRange):
        ertragsanteil_for_age(-1)


def test_ertragsanteil_taxes_only_the_taxable_share():
    # 17% of 1000 taxable, at 25%
    assert payout_tax(1_000.0, TaxTreatment.ERTRAGSANTEIL, 0.25, 0.17) == pytest.approx(42.5)
    assert net_payout(1_000.0, TaxTreatment.ERTRAGSANTEIL, 0.25, 0.17) == pytest.approx(957.5)


def test_ertragsanteil_fraction_is_never_defaulted():
    with pytest.raises(MissingParameter) as exc:
        net_payout(1_000.0, TaxTreatment.ERTRAGSANTEIL, 0.25)
    assert exc.value.field == "ertragsanteil_fraction"


def test_annual_gains_are_not_taxed_again_at_payout():
    assert net_payout(1_000.0, TaxTreatment.ANNUAL_CAPITAL_GAINS, 0.26375) == 1_000.0
    assert payout_tax(1_000.0, "annual_capital_gains", 0.26375) == 0.0


def test_net_accumulation_growth():
    assert net_accumulation_growth(0.067, 0.26375) == pytest.approx(0.067 * 0.73625)
    assert net_accumulation_growth(0.0, 0.26375) == 0.0
    assert net_accumulation_growth(-0.01, 0.26375) == -0.01


def test_accumulation_is_untaxed_under_ertragsanteil():
    assert accumulation_growth(0.047, TaxTreatment.ERTRAGSANTEIL, 0.25) == 0.047
    assert accumulation_growth(0.047, TaxTreatment.ANNUAL_CAPITAL_GAINS, 0.25) == pytest.approx(0.03525)


@pytest.mark.parametrize("gross", [0.0, 12.34, 1_500.0])
@pytest.mark.parametrize("rate", [0.0, 0.25, 0.45, 1.0])
@pytest.mark.parametrize("treatment", list(TaxTreatment))
def test_tax_never_adds_value(gross, rate, treatment):
    assert net_payout(gross, treatment, rate, 0.17) <= gross
    assert net_accumulation_growth(gross / 10_000, rate) <= gross / 10_000


def test_unknown_treatment():
    with pytest.raises(InvalidInput):
        net_payout(100.0, "vorabpauschale", 0.25, 0.17)


def test_tax_rate_must_be_fraction():
    with pytest.raises(InvalidInput):
        net_payout(100.0, TaxTreatment.ERTRAGSANTEIL, 25, 0.17)


@pytest.mark.parametrize("age", [97, 131, 150])
def test_last_ertragsanteil_band_has_no_upper_age(age):
    assert ertragsanteil_for_age(age) == 0.01
