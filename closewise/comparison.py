"""Side-by-side comparison of purchase scenarios across loan programs."""

from __future__ import annotations

import logging
from typing import List, Sequence

import pandas as pd
from pydantic import BaseModel

from closewise.common import down_payment_from_percent, round_to_cents
from closewise.config import RateBook
from closewise.conventional import calculate_conventional_purchase
from closewise.fha import calculate_fha_purchase
from closewise.models import (
    ConventionalPurchaseInput,
    FhaPurchaseInput,
    LoanCalculationResult,
    VaPurchaseInput,
)
from closewise.va import calculate_va_purchase

logger = logging.getLogger(__name__)

MAX_SCENARIOS = 3

COLUMNS = [
    "name",
    "program",
    "loan_amount",
    "total_loan_amount",
    "down_payment",
    "ltv",
    "monthly_payment",
    "principal_and_interest",
    "mortgage_insurance",
    "cash_to_close",
    "monthly_payment_diff",
    "cash_to_close_diff",
    "is_baseline",
]


class ComparisonScenario(BaseModel):
    name: str
    program: str
    sales_price: float
    down_payment_percent: float = 0.0
    interest_rate: float = 0.0
    term_years: int = 30


def _calculate(
    scenario: ComparisonScenario,
    property_tax_monthly: float,
    home_insurance_monthly: float,
    hoa_dues_monthly: float,
    config: RateBook,
) -> LoanCalculationResult:
    shared = dict(
        sales_price=scenario.sales_price,
        down_payment_amount=down_payment_from_percent(scenario.sales_price, scenario.down_payment_percent),
        interest_rate=scenario.interest_rate,
        term_years=scenario.term_years,
        property_tax_monthly=property_tax_monthly,
        home_insurance_monthly=home_insurance_monthly,
        hoa_dues_monthly=hoa_dues_monthly,
    )
    if scenario.program == "conventional":
        return calculate_conventional_purchase(ConventionalPurchaseInput(**shared), config)
    if scenario.program == "fha":
        return calculate_fha_purchase(FhaPurchaseInput(**shared), config)
    if scenario.program == "va":
        return calculate_va_purchase(VaPurchaseInput(**shared), config)
    raise ValueError(f"Unknown loan program: {scenario.program}")


def compare_scenarios(
    scenarios: Sequence[ComparisonScenario],
    config: RateBook,
    property_tax_monthly: float = 0.0,
    home_insurance_monthly: float = 0.0,
    hoa_dues_monthly: float = 0.0,
) -> pd.DataFrame:
    """Run each scenario as a purchase and tabulate the results.

    The first scenario is the baseline; ``monthly_payment_diff`` and
    ``cash_to_close_diff`` are measured against it.  Tax, insurance and HOA
    figures are shared by all scenarios.
    """
    if not 2 <= len(scenarios) <= MAX_SCENARIOS:
        raise ValueError(f"Compare 2 to {MAX_SCENARIOS} scenarios, got {len(scenarios)}")

    rows: List[dict] = []
    for scenario in scenarios:
        result = _calculate(
            scenario, property_tax_monthly, home_insurance_monthly, hoa_dues_monthly, config
        )
        rows.append(
            {
                "name": scenario.name,
                "program": scenario.program,
                "loan_amount": result.loan_amount,
                "total_loan_amount": result.total_loan_amount,
                "down_payment": result.down_payment,
                "ltv": result.ltv,
                "monthly_payment": result.monthly_payment.total_monthly,
                "principal_and_interest": result.monthly_payment.principal_and_interest,
                "mortgage_insurance": result.monthly_payment.mortgage_insurance,
                "cash_to_close": result.cash_to_close,
            }
        )

    df = pd.DataFrame(rows)
    baseline = df.iloc[0]
    df["monthly_payment_diff"] = (df["monthly_payment"] - baseline["monthly_payment"]).map(round_to_cents)
    df["cash_to_close_diff"] = (df["cash_to_close"] - baseline["cash_to_close"]).map(round_to_cents)
    df["is_baseline"] = [i == 0 for i in range(len(df))]
    logger.debug("Compared %d scenarios", len(df))
    return df[COLUMNS]


def comparison_summary(df: pd.DataFrame) -> str:
    """One line per scenario: monthly payment and its difference from the baseline."""
    lines = []
    for _, row in df.iterrows():
        if row["is_baseline"]:
            diff = "(Baseline)"
        else:
            sign = "+" if row["monthly_payment_diff"] >= 0 else "-"
            diff = f"({sign}${abs(row['monthly_payment_diff']):,.2f}/mo)"
        lines.append(f"{row['name']}: ${row['monthly_payment']:,.2f}/mo {diff}")
    return "\n".join(lines)
