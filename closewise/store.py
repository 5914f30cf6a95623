"""In-memory holder for the last inputs and result of each calculator.

The engine itself is stateless; front ends keep one slot per
``(program, scenario)`` here and can dump them as plain dicts.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple, Type

from pydantic import BaseModel

from closewise.models import (
    ConventionalPurchaseInput,
    ConventionalRefinanceInput,
    FhaPurchaseInput,
    FhaRefinanceInput,
    LoanCalculationResult,
    VaPurchaseInput,
    VaRefinanceInput,
)

logger = logging.getLogger(__name__)

StoreKey = Tuple[str, str]

INPUT_MODELS: Dict[StoreKey, Type[BaseModel]] = {
    ("conventional", "purchase"): ConventionalPurchaseInput,
    ("conventional", "refinance"): ConventionalRefinanceInput,
    ("fha", "purchase"): FhaPurchaseInput,
    ("fha", "refinance"): FhaRefinanceInput,
    ("va", "purchase"): VaPurchaseInput,
    ("va", "refinance"): VaRefinanceInput,
}


def _check_key(program: str, scenario: str) -> StoreKey:
    key = (program, scenario)
    if key not in INPUT_MODELS:
        raise KeyError(f"Unknown calculator: {program}/{scenario}")
    return key


def _slot_name(key: StoreKey) -> str:
    return f"{key[0]}_{key[1]}"


class StoreEntry(BaseModel):
    inputs: Any
    result: Optional[LoanCalculationResult] = None


class CalculatorStore:
    def __init__(self) -> None:
        self._entries: Dict[StoreKey, StoreEntry] = {}

    def save(
        self,
        program: str,
        scenario: str,
        inputs: BaseModel,
        result: Optional[LoanCalculationResult] = None,
    ) -> None:
        key = _check_key(program, scenario)
        expected = INPUT_MODELS[key]
        if not isinstance(inputs, expected):
            raise TypeError(f"{program}/{scenario} expects {expected.__name__}, got {type(inputs).__name__}")
        self._entries[key] = StoreEntry(inputs=inputs, result=result)

    def get(self, program: str, scenario: str) -> Optional[StoreEntry]:
        """Entry for a calculator, or ``None`` when nothing was saved yet."""
        return self._entries.get(_check_key(program, scenario))

    def clear(self, program: Optional[str] = None, scenario: Optional[str] = None) -> None:
        if program is None and scenario is None:
            self._entries.clear()
            return
        self._entries.pop(_check_key(program, scenario), None)

    def __len__(self) -> int:
        return len(self._entries)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        data: Dict[str, Dict[str, Any]] = {}
        for key, entry in self._entries.items():
            data[_slot_name(key)] = {
                "inputs": entry.inputs.model_dump(),
                "result": entry.result.model_dump() if entry.result is not None else None,
            }
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Dict[str, Any]]) -> "CalculatorStore":
        """Rebuild a store from :meth:`to_dict` output; unknown slots are skipped."""
        store = cls()
        slots = {_slot_name(key): key for key in INPUT_MODELS}
        for name, payload in data.items():
            key = slots.get(name)
            if key is None:
                logger.warning("Skipping unknown calculator slot %r", name)
                continue
            inputs = INPUT_MODELS[key].model_validate(payload["inputs"])
            result = payload.get("result")
            store._entries[key] = StoreEntry(
                inputs=inputs,
                result=LoanCalculationResult.model_validate(result) if result is not None else None,
            )
        return store
