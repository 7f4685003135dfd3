import numpy as np
import pandas as pd

from growth import accumulate
from simulation import CostAssumptions, PlanInputs, validate_assumptions, validate_inputs
from taxes import TaxTreatment, as_treatment


def project_capital_schedule(inputs: PlanInputs, assumptions: CostAssumptions) -> pd.DataFrame:
    """
    Year-by-year accumulation for charts: capital after costs (and after
    Abgeltungssteuer where it applies) next to the same plan without costs.
    cost_drag is what the costs have eaten by that year.
    """
    years = validate_inputs(inputs)
    validate_assumptions(assumptions)
    taxed = as_treatment(assumptions.tax_treatment) is TaxTreatment.ANNUAL_CAPITAL_GAINS
    tax_rate = assumptions.tax_rate if taxed else 0.0

    net = accumulate(inputs.initial_capital, inputs.monthly_contribution,
                     assumptions.pre_tax_return, years, tax_rate)
    no_costs = accumulate(inputs.initial_capital, inputs.monthly_contribution,
                          assumptions.expected_annual_return, years, tax_rate)

    idx = np.arange(len(net.capital_by_year))
    months_paid = np.minimum(idx * 12, int(round(years * 12)))
    out = pd.DataFrame({
        "year": idx,
        "age": inputs.current_age + idx,
        "contributions": inputs.initial_capital + inputs.monthly_contribution * months_paid,
        "capital": net.capital_by_year,
        "capital_without_costs": no_costs.capital_by_year,
        "tax_paid": net.tax_by_year,
    })
    out["cost_drag"] = out["capital_without_costs"] - out["capital"]
    return out


def total_cost_drag(inputs: PlanInputs, assumptions: CostAssumptions) -> float:
    df = project_capital_schedule(inputs, assumptions)
    return float(df["cost_drag"].iloc[-1])
