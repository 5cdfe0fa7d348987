# -*- coding: utf-8 -*-
"""
Calculation Provenance Tracking

SHA-256 provenance records for insulation calculations. Each calculator
run records its inputs, every intermediate step and its outputs; the
record hash is computed from a deterministic JSON serialization so the
same inputs always produce the same hash.

No timestamps enter the hash. The record carries a wall-clock timestamp
for audit display only.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


def _canonical(value: Any) -> Any:
    """Reduce a value to JSON-stable primitives."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, dict):
        return {str(k): _canonical(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    if value is None or isinstance(value, (bool, int, str)):
        return value
    return str(value)


def _hash(data: Dict[str, Any]) -> str:
    payload = json.dumps(_canonical(data), sort_keys=True, separators=(',', ':'))
    return hashlib.sha256(payload.encode('utf-8')).hexdigest()


@dataclass(frozen=True)
class CalculationStep:
    """
    Individual calculation step.

    Attributes:
        step_number: Sequential step identifier
        description: Human-readable description of the step
        operation: Operation performed (divide, log, lookup, scan, ...)
        inputs: Values used by the step
        output_name: Name of the produced quantity
        output_value: Produced value
        formula: Formula in text form
    """
    step_number: int
    description: str
    operation: str
    inputs: Dict[str, Any]
    output_name: str
    output_value: Any
    formula: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number": self.step_number,
            "description": self.description,
            "operation": self.operation,
            "inputs": _canonical(self.inputs),
            "output_name": self.output_name,
            "output_value": _canonical(self.output_value),
            "formula": self.formula,
        }


@dataclass(frozen=True)
class ProvenanceRecord:
    """
    Complete, immutable provenance of one calculation.

    ``calculation_id`` is the first 16 hex digits of the hash of the
    calculator identity and inputs, so repeated runs share an id.
    """
    calculation_id: str
    calculator_name: str
    calculator_version: str
    inputs: Dict[str, Any]
    steps: List[CalculationStep]
    outputs: Dict[str, Any]
    provenance_hash: str
    timestamp_utc: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    def _hash_payload(self) -> Dict[str, Any]:
        return {
            "calculation_id": self.calculation_id,
            "calculator_name": self.calculator_name,
            "calculator_version": self.calculator_version,
            "inputs": self.inputs,
            "steps": [step.to_dict() for step in self.steps],
            "outputs": self.outputs,
        }

    def verify_integrity(self) -> bool:
        """Recompute the hash and compare it with the stored one."""
        return _hash(self._hash_payload()) == self.provenance_hash

    def to_audit_record(self) -> Dict[str, Any]:
        return {
            "calculation_id": self.calculation_id,
            "calculator": f"{self.calculator_name} v{self.calculator_version}",
            "timestamp_utc": self.timestamp_utc,
            "inputs": _canonical(self.inputs),
            "calculation_steps": [step.to_dict() for step in self.steps],
            "outputs": _canonical(self.outputs),
            "provenance_hash": self.provenance_hash,
            "integrity_verified": self.verify_integrity(),
            "metadata": self.metadata,
        }


class ProvenanceTracker:
    """
    Collects the provenance of a single calculator run.

    Example:
        >>> tracker = ProvenanceTracker("HeatLossCalculator", "1.0.0")
        >>> tracker.set_inputs({"ambient_temp_c": 20.0})
        >>> tracker.add_step(1, "Mean temperature", "average",
        ...                  {"a": 20.0, "b": 80.0}, 50.0, "t_mean_c")
        >>> tracker.set_outputs({"t_mean_c": 50.0})
        >>> record = tracker.finalize()
    """

    def __init__(
        self,
        calculator_name: str,
        calculator_version: str,
        metadata: Optional[Dict[str, Any]] = None
    ):
        self.calculator_name = calculator_name
        self.calculator_version = calculator_version
        self.metadata = metadata or {}
        self._inputs: Dict[str, Any] = {}
        self._steps: List[CalculationStep] = []
        self._outputs: Dict[str, Any] = {}

    @property
    def steps(self) -> List[CalculationStep]:
        return list(self._steps)

    def set_inputs(self, inputs: Dict[str, Any]) -> None:
        self._inputs = dict(inputs)

    def add_step(
        self,
        step_number: int,
        description: str,
        operation: str,
        inputs: Dict[str, Any],
        output_value: Any,
        output_name: str,
        formula: str = ""
    ) -> CalculationStep:
        """Append a calculation step and return it."""
        step = CalculationStep(
            step_number=step_number,
            description=description,
            operation=operation,
            inputs=dict(inputs),
            output_name=output_name,
            output_value=output_value,
            formula=formula,
        )
        self._steps.append(step)
        return step

    def set_outputs(self, outputs: Dict[str, Any]) -> None:
        self._outputs = dict(outputs)

    def finalize(self) -> ProvenanceRecord:
        """Freeze the collected data into a hashed ProvenanceRecord."""
        calculation_id = _hash({
            "calculator_name": self.calculator_name,
            "calculator_version": self.calculator_version,
            "inputs": self._inputs,
        })[:16]
        record = ProvenanceRecord(
            calculation_id=calculation_id,
            calculator_name=self.calculator_name,
            calculator_version=self.calculator_version,
            inputs=dict(self._inputs),
            steps=list(self._steps),
            outputs=dict(self._outputs),
            provenance_hash="",
            timestamp_utc=datetime.now(timezone.utc).isoformat(),
            metadata=dict(self.metadata),
        )
        digest = _hash(record._hash_payload())
        object.__setattr__(record, "provenance_hash", digest)
        return record


__all__ = [
    "CalculationStep",
    "ProvenanceRecord",
    "ProvenanceTracker",
]
