# app.py
import logging
from dataclasses import replace

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from config import (APP_NAME, DEFAULTS, DEFAULT_INFLATION, DEFAULT_PAYOUT_HORIZON_YEARS,
                    DEFAULT_PERSONAL_TAX_RATE, LOG_LEVEL)
from costs import project_capital_schedule, total_cost_drag
from dashboard import project_dashboard
from drawdown import PayoutMode
from errors import ProjectionError
from recompute import LatestResultGate
from returns_presets import COMPARISON, PRESETS
from scenarios import compare_strategies, compare_vehicles
from simulation import PlanInputs
from taxes import TaxTreatment, ertragsanteil_for_age
from ui import format_eur, header, helptext, inject_css, kpi_card

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("app")

# ------------- Page setup -------------
st.set_page_config(page_title=APP_NAME, page_icon="📈", layout="wide")
inject_css()
header(APP_NAME, "Fondsgebundene Rente, ETF-Sparplan und klassische Rentenversicherung im Steuervergleich")

# ------------- Sidebar (inputs) -------------
st.sidebar.header("Ihr Profil")
current_age = st.sidebar.number_input("Aktuelles Alter", min_value=18, max_value=80,
                                      value=DEFAULTS["current_age"])
retirement_age = st.sidebar.number_input("Gewünschtes Rentenalter", min_value=current_age + 1, max_value=100,
                                         value=max(DEFAULTS["retirement_age"], current_age + 1))
monthly_contribution = st.sidebar.number_input("Monatliche Sparrate (€)", min_value=0.0,
                                               value=DEFAULTS["monthly_contribution"], step=25.0)
initial_capital = st.sidebar.number_input("Startkapital (€)", min_value=0.0,
                                          value=DEFAULTS["initial_capital"], step=1000.0)
target_capital = st.sidebar.number_input("Zielkapital (€, 0 = keins)", min_value=0.0,
                                         value=DEFAULTS["target_capital"] or 0.0, step=10_000.0)

st.sidebar.header("Auszahlung")
PAYOUT_MODES = [PayoutMode.ANNUITY.value, PayoutMode.FLEXIBLE_WITHDRAWAL.value]
payout_mode = st.sidebar.selectbox(
    "Auszahlungsart", PAYOUT_MODES, index=PAYOUT_MODES.index(DEFAULTS["payout_mode"]),
    format_func=lambda m: "Verrentung (Annuität)" if m == PayoutMode.ANNUITY.value else "Entnahmeplan",
    help="Ein ETF-Sparplan kann nicht verrentet werden und nutzt immer den Entnahmeplan.",
)
annuity_rate = st.sidebar.slider("Rentenfaktor / Annuitätsrate (%/Jahr)", 0.0, 10.0,
                                 DEFAULTS["annuity_rate"] * 100, 0.1) / 100.0
safe_withdrawal_rate = st.sidebar.slider("Entnahmerate (%/Jahr)", 0.0, 10.0,
                                         DEFAULTS["safe_withdrawal_rate"] * 100, 0.1) / 100.0
payout_end_age = st.sidebar.number_input("Rentenende (Alter)", min_value=retirement_age + 1, max_value=120,
                                         value=max(DEFAULTS["payout_end_age"], retirement_age + 1))

st.sidebar.header("Steuern")
personal_tax_rate = st.sidebar.slider("Persönlicher Steuersatz im Alter (%)", 0.0, 45.0,
                                      DEFAULT_PERSONAL_TAX_RATE * 100, 0.5) / 100.0
ertragsanteil = st.sidebar.number_input(
    "Ertragsanteil (%)", min_value=0.0, max_value=100.0,
    value=ertragsanteil_for_age(retirement_age) * 100, step=1.0,
    help="Gesetzlicher Wert für das Rentenalter; bei Bedarf überschreiben.",
) / 100.0
horizon_from_payout_age = st.sidebar.checkbox(
    "Rentendauer aus Rentenende ableiten", value=False,
    help=f"Sonst werden pauschal {DEFAULT_PAYOUT_HORIZON_YEARS} Rentenjahre für die Steuer angesetzt.",
)
payout_horizon = (payout_end_age - retirement_age) if horizon_from_payout_age else DEFAULT_PAYOUT_HORIZON_YEARS
inflation = st.sidebar.slider("Inflation (%/Jahr)", 0.0, 6.0, DEFAULT_INFLATION * 100, 0.1) / 100.0

# ------------- Inputs snapshot -------------
inputs = PlanInputs(
    current_age=int(current_age),
    retirement_age=int(retirement_age),
    monthly_contribution=monthly_contribution,
    initial_capital=initial_capital,
    target_capital=target_capital or None,
    payout_end_age=int(payout_end_age),
    payout_mode=PayoutMode(payout_mode),
    annuity_rate=annuity_rate,
    safe_withdrawal_rate=safe_withdrawal_rate,
)


def _with_personal_tax(vehicle):
    a = vehicle.assumptions
    if a.tax_treatment is not TaxTreatment.ERTRAGSANTEIL:
        return vehicle
    return replace(vehicle, assumptions=replace(a, tax_rate=personal_tax_rate, ertragsanteil_fraction=ertragsanteil))


vehicles = [_with_personal_tax(PRESETS[name]) for name in COMPARISON]

if "gate" not in st.session_state:
    st.session_state["gate"] = LatestResultGate()
gate = st.session_state["gate"]

ticket = gate.next_ticket()
try:
    comparison = compare_vehicles(
        inputs, vehicles,
        tax_advantage_pair=("ETF-Sparplan", "Debeka Fondsgebundene Rente"),
        payout_horizon_years=payout_horizon,
        inflation_rate=inflation,
    )
    schedules = {v.name: project_capital_schedule(inputs, v.assumptions) for v in vehicles}
except ProjectionError as e:
    logger.info("Rejected input: %s", e)
    st.error(f"Bitte Eingaben prüfen: {e}")
    st.stop()

gate.offer(ticket, comparison)
comparison = gate.result

# ------------- Results -------------
st.markdown(f"### 1) Vergleich nach {inputs.years} Jahren Ansparphase")
helptext("Alle Beträge in Euro, nominal. Die Netto-Rente berücksichtigt die jeweilige Besteuerung.")

cols = st.columns(len(comparison.results))
for col, (name, r) in zip(cols, comparison.results.items()):
    badge = " 🏆" if name == comparison.winner else ""
    kpi_card(col, f"{name}{badge}", f"{format_eur(r.net_monthly_pension)}/Monat",
             f"Brutto {format_eur(r.gross_monthly_pension)} • Endkapital {format_eur(r.final_capital)}")
    kpi_card(col, "Steuern gesamt", format_eur(r.total_tax_paid),
             f"Ansparphase {format_eur(r.tax_during_accumulation)} • Rentenphase {format_eur(r.tax_during_payout)}")
    kpi_card(col, "Netto-Rendite p.a.", f"{r.effective_net_annual_return * 100:.2f}%",
             f"Kaufkraft heute: {format_eur(r.real_net_monthly_pension)}/Monat")
    if r.target_shortfall:
        col.warning(f"Ziel verfehlt um {format_eur(r.target_shortfall)}: "
                    f"nötig wären {format_eur(r.required_monthly_contribution)}/Monat.")

if comparison.tax_advantage:
    st.success(f"🎯 Die fondsgebundene Rente spart Ihnen {format_eur(comparison.tax_advantage)} an Steuern "
               f"gegenüber dem ETF-Sparplan mit jährlicher Abgeltungssteuer.")

# ------------- Charts -------------
figC = go.Figure()
for name, df in schedules.items():
    figC.add_trace(go.Scatter(x=df["age"], y=df["capital"], mode="lines", name=name))
any_schedule = next(iter(schedules.values()))
figC.add_trace(go.Scatter(x=any_schedule["age"], y=any_schedule["contributions"], mode="lines",
                          name="Eingezahlt", line=dict(dash="dot")))
figC.update_layout(
    title="Kapitalentwicklung bis Rentenbeginn", xaxis_title="Alter", yaxis_title="€",
    hovermode="x unified", margin=dict(l=30, r=20, t=60, b=30)
)
st.plotly_chart(figC, use_container_width=True)

names = list(comparison.results.keys())
by_name = {v.name: v for v in vehicles}
figP = go.Figure()
figP.add_trace(go.Bar(x=names, y=[comparison.results[n].gross_monthly_pension for n in names], name="Brutto"))
figP.add_trace(go.Bar(x=names, y=[comparison.results[n].net_monthly_pension for n in names], name="Netto"))
figP.update_layout(title="Monatliche Rente", barmode="group", yaxis_title="€ pro Monat",
                   margin=dict(l=30, r=20, t=60, b=30))
st.plotly_chart(figP, use_container_width=True)

costs_row = pd.DataFrame({
    "Produkt": names,
    "Eingezahlt": [comparison.results[n].total_contributions for n in names],
    "Ertrag": [comparison.results[n].investment_gain for n in names],
    "Kosten (Renditeverlust)": [total_cost_drag(inputs, by_name[n].assumptions) for n in names],
})
st.dataframe(costs_row, use_container_width=True, hide_index=True)

# ------------- What-ifs -------------
st.markdown("### 2) Strategien im Vergleich")
private = _with_personal_tax(PRESETS["Private Rentenversicherung"])
strategies = compare_strategies(inputs, private.assumptions, private.kind, payout_horizon_years=payout_horizon)
st.dataframe(strategies, use_container_width=True, hide_index=True)

# ------------- Dashboard -------------
with st.expander("Gesamtübersicht aller Rentenquellen"):
    c1, c2 = st.columns(2)
    statutory = {
        "public": c1.number_input("Gesetzliche Rente mit 67 (€/Monat)", min_value=0.0, value=0.0, step=50.0),
        "civil": c1.number_input("Beamtenpension (€/Monat)", min_value=0.0, value=0.0, step=50.0),
        "profession": c1.number_input("Berufsständische Versorgung (€/Monat)", min_value=0.0, value=0.0, step=50.0),
        "zvk_vbl": c1.number_input("ZVK/VBL (€/Monat)", min_value=0.0, value=0.0, step=50.0),
    }
    contributions = {
        "private_pension": monthly_contribution,
        "riester": c2.number_input("Riester-Beitrag (€/Monat)", min_value=0.0, value=0.0, step=10.0),
        "ruerup": c2.number_input("Rürup-Beitrag (€/Monat)", min_value=0.0, value=0.0, step=10.0),
        "occupational": c2.number_input("bAV-Beitrag (€/Monat)", min_value=0.0, value=0.0, step=10.0),
    }
    summary = project_dashboard(statutory, contributions, inputs.years,
                                current_savings={"initial_capital": initial_capital})
    d1, d2, d3 = st.columns(3)
    kpi_card(d1, "Prognostizierte Rente gesamt", f"{format_eur(summary.total_projected_pension)}/Monat")
    kpi_card(d2, "Monatliche Beiträge", format_eur(summary.total_monthly_contribution))
    kpi_card(d3, "Jahre bis Rente", str(summary.years_to_retirement))

st.markdown("---")
st.caption("Vereinfachte Modellrechnung ohne Sterbetafeln; keine Anlage- oder Steuerberatung.")
