# Opinionated vehicle presets for the comparison page. Returns are long-run
# nominal estimates before costs; costs are TER + management combined.
# Sane defaults users can override, not promises.

from config import ABGELTUNGSSTEUER, DEFAULTS
from simulation import CostAssumptions, Vehicle, VehicleKind
from taxes import TaxTreatment

ERTRAGSANTEIL_67 = DEFAULTS["ertragsanteil_fraction"]
PERSONAL_TAX_RATE = DEFAULTS["personal_tax_rate"]

PRESETS = {
    # Debeka Global Shares historical avg
    "Debeka Fondsgebundene Rente": Vehicle(
        name="Debeka Fondsgebundene Rente",
        kind=VehicleKind.FUND_LINKED_INSURANCE,
        assumptions=CostAssumptions(0.06, 0.013, TaxTreatment.ERTRAGSANTEIL,
                                    PERSONAL_TAX_RATE, ERTRAGSANTEIL_67),
    ),
    # MSCI World historical avg, 0.3% TER
    "ETF-Sparplan": Vehicle(
        name="ETF-Sparplan",
        kind=VehicleKind.DIRECT_FUND,
        assumptions=CostAssumptions(0.07, 0.003, TaxTreatment.ANNUAL_CAPITAL_GAINS, ABGELTUNGSSTEUER),
    ),
    # conservative guaranteed rate
    "Klassische Rentenversicherung": Vehicle(
        name="Klassische Rentenversicherung",
        kind=VehicleKind.GUARANTEED_RATE_INSURANCE,
        assumptions=CostAssumptions(0.02, 0.01, TaxTreatment.ERTRAGSANTEIL,
                                    PERSONAL_TAX_RATE, ERTRAGSANTEIL_67),
    ),
    # active-fund private pension: 0.8% TER + 0.4% policy fee
    "Private Rentenversicherung": Vehicle(
        name="Private Rentenversicherung",
        kind=VehicleKind.PRIVATE_PENSION_PLAN,
        assumptions=CostAssumptions(0.065, 0.012, TaxTreatment.ERTRAGSANTEIL,
                                    PERSONAL_TAX_RATE, ERTRAGSANTEIL_67),
    ),
}

# The three-way comparison page
COMPARISON = ["Debeka Fondsgebundene Rente", "ETF-Sparplan", "Klassische Rentenversicherung"]
