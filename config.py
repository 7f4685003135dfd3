import os

APP_NAME = "Rentenvergleich: Debeka vs ETF vs Klassische Rente"

# Default plan (mirrors the calculator form; all rates are decimal fractions)
DEFAULTS = {
    "current_age": 30,
    "retirement_age": 67,
    "monthly_contribution": 500.0,
    "initial_capital": 10_000.0,
    "target_capital": None,

    # Payout phase
    "payout_end_age": 85,
    "payout_mode": "annuity",
    "annuity_rate": 0.025,            # realistic insurer rate at current interest levels
    "safe_withdrawal_rate": 0.035,    # conservative SWR

    # Taxes
    "personal_tax_rate": 0.25,        # marginal rate applied to the Ertragsanteil
    "ertragsanteil_fraction": 0.17,   # taxable share at payout start 67

    # Display
    "inflation": 0.025,
}

# Policy constants
MAX_HORIZON_YEARS = 100
DEFAULT_PAYOUT_HORIZON_YEARS = 20     # years of retirement used to annualise payout tax
ABGELTUNGSSTEUER = 0.26375            # 25% + 5.5% Soli
DEFAULT_PERSONAL_TAX_RATE = DEFAULTS["personal_tax_rate"]
DEFAULT_INFLATION = DEFAULTS["inflation"]

LOG_LEVEL = os.environ.get("RENTENVERGLEICH_LOG_LEVEL", "INFO").upper()
