"""Tests for the strain-history driver.

Benchmark: fc=25 MPa, ft=2 MPa, Ec=25000 MPa, MCFT
Strain history: 0.0005 -> 0.002 -> -0.001

Expected:
  - Cracked by the second step, still cracked after unloading into
    compression (the crack flag never resets)
"""

import math

import pytest

from smeared_concrete.analysis.history import (
    BIAXIAL_COLUMNS,
    UNIAXIAL_COLUMNS,
    StrainHistoryAnalysis,
)
from smeared_concrete.materials.concrete import BiaxialConcrete, UniaxialConcrete
from smeared_concrete.materials.parameters import ConcreteParameters


@pytest.fixture
def params():
    return ConcreteParameters(fc=25, ft=2.0, Ec=25000, model="mcft")


@pytest.fixture
def bar(params):
    return UniaxialConcrete(params, area=10000, model="mcft")


class TestUniaxialHistory:
    def test_runs(self, bar):
        result = StrainHistoryAnalysis(bar, [0.0005, 0.002, -0.001]).run()
        assert len(result.points) == 3
        assert result.analysis_type == "uniaxial"
        assert result.model == "mcft"

    def test_cracking_persists(self, bar):
        result = StrainHistoryAnalysis(bar, [0.0005, 0.002, -0.001]).run()
        assert result.cracked
        assert result.cracking_index is not None
        assert result.cracking_index <= 1
        assert result.points[1].cracked
        assert result.points[2].cracked
        assert result.points[2].stresses[0] < 0

    def test_no_cracking_in_compression(self, bar):
        result = StrainHistoryAnalysis(bar, [-0.0005, -0.001, -0.0015]).run()
        assert result.cracking_index is None
        assert not result.cracked

    def test_yield_and_crush(self, bar):
        result = StrainHistoryAnalysis(bar, [-0.001, -0.0025, -0.004]).run()
        assert result.yield_index == 1
        assert result.crushing_index == 2

    def test_strains_and_stresses(self, bar):
        result = StrainHistoryAnalysis(bar, [-0.001, -0.002]).run()
        assert result.strains == [(-0.001,), (-0.002,)]
        assert result.stresses[1][0] == pytest.approx(-25.0)

    def test_to_dict(self, bar):
        result = StrainHistoryAnalysis(bar, [0.0005, 0.002]).run()
        d = result.to_dict()
        assert d["summary"]["total_steps"] == 2
        assert d["summary"]["cracking_step"] == result.cracking_index
        row = d["response"][1]
        for key in UNIAXIAL_COLUMNS:
            assert key in row
        assert row["step"] == 1
        assert row["cracked"] is True


class TestBiaxialHistory:
    def test_principal_history(self, params):
        panel = BiaxialConcrete(params)
        history = [(0.0, -0.0005), (0.0002, -0.001), (0.002, -0.001, 0.3)]
        result = StrainHistoryAnalysis(panel, history).run()
        assert result.analysis_type == "biaxial"
        assert result.points[0].strains[2] == pytest.approx(math.pi / 4)
        assert result.points[2].strains[2] == pytest.approx(0.3)
        assert result.cracking_index == 1
        assert result.points[0].stresses[1] < 0

    def test_xy_history(self, params):
        panel = BiaxialConcrete(params)
        result = StrainHistoryAnalysis(panel, [(0.0, 0.0, 0.002)], xy=True).run()
        e1, e2, theta1 = result.points[0].strains
        assert e1 == pytest.approx(0.001)
        assert e2 == pytest.approx(-0.001)
        assert theta1 == pytest.approx(math.pi / 4)

    def test_reference_length_forwarded(self, params):
        short = StrainHistoryAnalysis(BiaxialConcrete(params, model="dsfm"),
                                      [(0.001, -0.0002)], reference_length=5.0).run()
        long = StrainHistoryAnalysis(BiaxialConcrete(params, model="dsfm"),
                                     [(0.001, -0.0002)], reference_length=50.0).run()
        assert short.points[0].stresses[0] > long.points[0].stresses[0]

    def test_rows(self, params):
        panel = BiaxialConcrete(params)
        result = StrainHistoryAnalysis(panel, [(0.0002, -0.001)]).run()
        row = result.rows()[0]
        for key in BIAXIAL_COLUMNS:
            assert key in row
        assert row["Ec1"] == pytest.approx(row["fc1"] / row["epsilon1"])
