from __future__ import annotations
from typing import Literal, List, Dict, Any
from pydantic import BaseModel, Field

from closewise.config import RateBook
from closewise.models import LoanCalculationResult


class RuleResult(BaseModel):
    code: str
    severity: Literal["info", "warn", "critical"]
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


def evaluate_rules(result: LoanCalculationResult, config: RateBook) -> List[RuleResult]:
    """Advisory flags for a finished calculation; never changes the numbers."""
    res: List[RuleResult] = []

    loan = result.loan_amount
    limits = config.limits

    if result.program == "fha" and loan > limits.fha:
        res.append(
            RuleResult(
                code="FHA_OVER_LIMIT",
                severity="critical",
                message="Base loan exceeds the FHA loan limit.",
                context={"loan_amount": loan, "limit": limits.fha},
            )
        )
    elif result.program != "fha" and loan > limits.conforming:
        res.append(
            RuleResult(
                code="JUMBO_LOAN",
                severity="warn",
                message="Loan exceeds the conforming limit; jumbo pricing applies.",
                context={"loan_amount": loan, "limit": limits.conforming},
            )
        )

    if result.ltv > 100:
        res.append(
            RuleResult(
                code="LTV_OVER_100",
                severity="critical",
                message="Loan amount exceeds the property value.",
                context={"ltv": result.ltv},
            )
        )

    adjustment = result.closing_costs.adjustment
    if adjustment:
        res.append(
            RuleResult(
                code="CLOSING_COST_ADJUSTMENT",
                severity="info",
                message="Closing costs total was entered manually; an adjustment line was added.",
                context={"adjustment": adjustment},
            )
        )

    if result.scenario == "refinance" and result.cash_to_close < 0:
        res.append(
            RuleResult(
                code="CASH_BACK",
                severity="info",
                message="Borrower receives cash back at closing.",
                context={"cash_back": -result.cash_to_close},
            )
        )

    return res


def has_blocking(res: List[RuleResult]) -> bool:
    return any(r.severity == "critical" for r in res)
