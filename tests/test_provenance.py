# -*- coding: utf-8 -*-
"""Tests for calculation provenance tracking."""

from insulcalc.calculators.provenance import ProvenanceTracker
from insulcalc.models import HMode


def _record(inputs=None, output=50.0):
    tracker = ProvenanceTracker("TestCalculator", "1.0.0", metadata={"domain": "test"})
    tracker.set_inputs(inputs or {"ambient_temp_c": 20.0, "mode": HMode.KFLEX})
    tracker.add_step(
        step_number=1,
        description="Mean temperature",
        operation="average",
        inputs={"a": 20.0, "b": 80.0},
        output_value=output,
        output_name="t_mean_c",
        formula="(a + b) / 2",
    )
    tracker.set_outputs({"t_mean_c": output})
    return tracker.finalize()


class TestProvenanceTracker:

    def test_hash_is_deterministic(self):
        first, second = _record(), _record()
        assert first.provenance_hash == second.provenance_hash
        assert first.calculation_id == second.calculation_id
        assert len(first.provenance_hash) == 64
        assert len(first.calculation_id) == 16

    def test_hash_depends_on_outputs(self):
        assert _record(output=50.0).provenance_hash != _record(output=50.1).provenance_hash

    def test_calculation_id_depends_on_inputs_only(self):
        assert _record(output=1.0).calculation_id == _record(output=2.0).calculation_id
        assert _record({"ambient_temp_c": 21.0}).calculation_id != _record().calculation_id

    def test_verify_integrity_detects_tampering(self):
        record = _record()
        assert record.verify_integrity()
        record.outputs["t_mean_c"] = 99.0
        assert not record.verify_integrity()

    def test_audit_record(self):
        audit = _record().to_audit_record()
        assert audit["calculator"] == "TestCalculator v1.0.0"
        assert audit["integrity_verified"] is True
        assert audit["inputs"]["mode"] == "kflex"
        assert audit["calculation_steps"][0]["output_name"] == "t_mean_c"
        assert audit["metadata"] == {"domain": "test"}
