import streamlit as st

CARD_CSS = """
.card {border: 1px solid #e6e6e6; border-radius: 12px; padding: 14px 16px; margin-bottom: 8px;}
.card .caption {color: #6b7280; font-size: 0.8rem;}
.card .kpi {font-size: 1.5rem; font-weight: 700;}
.badge {display: inline-block; padding: 2px 8px; border-radius: 8px; background: #eef2ff; font-size: 0.75rem;}
"""


def inject_css():
    st.markdown(f"<style>{CARD_CSS}</style>", unsafe_allow_html=True)


def header(title: str, subtitle: str = ""):
    st.markdown(f"## {title}")
    if subtitle:
        st.caption(subtitle)
    st.markdown(
        "<div class='badge'>Ertragsanteil</div> "
        "<div class='badge'>Abgeltungssteuer</div> "
        "<div class='badge'>Annuität & Entnahmeplan</div>",
        unsafe_allow_html=True,
    )


def helptext(text: str):
    st.caption(text)


def format_eur(value: float) -> str:
    # de-DE style: 12.345 €
    return f"{value:,.0f} €".replace(",", ".")


def kpi_card(col, caption: str, value: str, note: str = ""):
    note_html = f"<div class='caption'>{note}</div>" if note else ""
    col.markdown(
        f"<div class='card'><div class='caption'>{caption}</div>"
        f"<div class='kpi'>{value}</div>{note_html}</div>",
        unsafe_allow_html=True,
    )
