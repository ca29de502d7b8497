"""Tests for the concrete constitutive laws under uniaxial strain."""

import logging
import math

import pytest

from smeared_concrete.constitutive.laws import (
    ConstitutiveLaw,
    ConstitutiveModel,
    DSFMLaw,
    LinearLaw,
    MCFTLaw,
    SMMLaw,
    create_law,
)
from smeared_concrete.materials.parameters import ConcreteParameters
from smeared_concrete.materials.reinforcement import UniaxialReinforcement


# --------------------------------------------------------------------------
# Fixtures
# --------------------------------------------------------------------------
@pytest.fixture
def params():
    """fc=30, ft=2, Ec=25000: ecr = 8e-5."""
    return ConcreteParameters.custom(fc=30.0, ft=2.0, Ec=25000.0, ec=-0.002, ecu=-0.0035)


@pytest.fixture
def bars():
    return UniaxialReinforcement(n_bars=4, bar_diameter=16, concrete_area=40000, yield_stress=500)


ALL_MODELS = list(ConstitutiveModel)


# --------------------------------------------------------------------------
# Factory
# --------------------------------------------------------------------------
class TestFactory:
    @pytest.mark.parametrize("model, cls", [
        (ConstitutiveModel.LINEAR, LinearLaw),
        (ConstitutiveModel.MCFT, MCFTLaw),
        (ConstitutiveModel.DSFM, DSFMLaw),
        (ConstitutiveModel.SMM, SMMLaw),
    ])
    def test_from_model(self, params, model, cls):
        law = ConstitutiveLaw.from_model(model, params)
        assert isinstance(law, cls)
        assert law.model == model
        assert not law.cracked

    def test_from_string(self, params):
        assert isinstance(create_law("MCFT", params), MCFTLaw)
        assert isinstance(create_law("dsfm", params), DSFMLaw)

    def test_unknown_model(self, params):
        with pytest.raises(ValueError):
            create_law("hognestad", params)

    def test_crack_slip_only_for_dsfm(self, params):
        assert create_law("dsfm", params, consider_crack_slip=False).Cs == 1.0
        assert create_law("dsfm", params).Cs == 0.55
        assert not create_law("mcft", params).consider_crack_slip


# --------------------------------------------------------------------------
# Common behaviour
# --------------------------------------------------------------------------
class TestCommon:
    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_zero_strain(self, params, model):
        law = create_law(model, params)
        assert law.stress(0.0) == 0.0
        assert not law.cracked

    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_compression_is_negative(self, params, model):
        assert create_law(model, params).stress(-0.001) < 0

    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_uniaxial_compression_matches_branch(self, params, model):
        law = create_law(model, params)
        for eps in (-0.0005, -0.002, -0.003):
            assert law.stress(eps) == pytest.approx(law.compressive_stress(eps, 0.0, 1.0))

    @pytest.mark.parametrize("model", [m for m in ALL_MODELS if m != ConstitutiveModel.LINEAR])
    def test_elastic_before_cracking(self, params, model):
        law = create_law(model, params)
        assert law.stress(4.0e-5) == pytest.approx(1.0, rel=1e-9)
        assert not law.cracked

    @pytest.mark.parametrize("model", [m for m in ALL_MODELS if m != ConstitutiveModel.LINEAR])
    def test_crack_flag_monotonic(self, params, model):
        law = create_law(model, params)
        law.stress(0.001)
        assert law.cracked
        for eps in (1.0e-5, -0.001, 0.0, 0.002):
            law.stress(eps)
            assert law.is_cracked()

    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_non_finite_strain(self, params, model):
        assert create_law(model, params).stress(float("nan")) == 0.0

    def test_crack_logged(self, params, caplog):
        caplog.set_level(logging.DEBUG, logger="smeared_concrete.constitutive.laws")
        law = MCFTLaw(params)
        law.stress(0.001)
        assert "cracked" in caplog.text


class TestSecantModule:
    def test_zero_stress_or_strain(self, params):
        law = MCFTLaw(params)
        assert law.secant_module(0.0, 0.001) == 25000.0
        assert law.secant_module(10.0, 0.0) == 25000.0

    def test_ratio(self, params):
        law = MCFTLaw(params)
        assert law.secant_module(-22.5, -0.001) == pytest.approx(22500.0)

    def test_capped_at_elastic(self, params):
        law = MCFTLaw(params)
        assert law.secant_module(30.0, 0.001) == 25000.0


# --------------------------------------------------------------------------
# Linear
# --------------------------------------------------------------------------
class TestLinear:
    def test_never_cracks(self, params):
        law = LinearLaw(params)
        assert law.stress(0.001) == pytest.approx(25.0)
        assert law.stress(-0.001) == pytest.approx(-25.0)
        assert not law.cracked


# --------------------------------------------------------------------------
# MCFT
# --------------------------------------------------------------------------
class TestMCFT:
    @pytest.fixture
    def stiff(self):
        """fc=30, Ec=27000 with ecr ~ 0.00074."""
        return ConcreteParameters.custom(fc=30.0, ft=20.0, Ec=27000.0, ec=-0.002, ecu=-0.0035)

    def test_uncracked_tension(self, stiff):
        law = MCFTLaw(stiff)
        assert law.stress(0.0005) == pytest.approx(13.5, rel=1e-9)
        assert not law.cracked

    def test_tension_stiffening(self, stiff):
        law = MCFTLaw(stiff)
        s1 = law.stress(0.002)
        assert law.cracked
        assert 0 < s1 < stiff.ft
        assert s1 == pytest.approx(stiff.ft / (1 + math.sqrt(500 * 0.002)), rel=1e-9)
        s2 = law.stress(0.004)
        assert s2 < s1

    def test_peak(self, params):
        law = MCFTLaw(params)
        assert law.stress(params.ec) == pytest.approx(-30.0, rel=1e-9)

    def test_parabola(self, params):
        law = MCFTLaw(params)
        assert law.stress(-0.001) == pytest.approx(-22.5, rel=1e-9)

    def test_beyond_parabola(self, params):
        law = MCFTLaw(params)
        assert law.stress(-0.005) == pytest.approx(0.0, abs=1e-12)

    def test_softening_by_transverse_tension(self, params):
        law = MCFTLaw(params)
        f2max = -30.0 / (0.8 + 0.34 * 0.002 / 0.002)
        assert law.compressive_stress(-0.002, 0.002) == pytest.approx(f2max, rel=1e-9)

    def test_small_transverse_strain_not_amplified(self, params):
        law = MCFTLaw(params)
        assert law.compressive_stress(-0.002, 1.0e-5) == pytest.approx(-30.0, rel=1e-9)

    def test_confinement_factor_scales(self, params):
        law = MCFTLaw(params)
        assert law.compressive_stress(-0.001, 0.0, 1.2) == pytest.approx(-22.5 * 1.2, rel=1e-9)


# --------------------------------------------------------------------------
# DSFM
# --------------------------------------------------------------------------
class TestDSFM:
    def test_peak(self, params):
        law = DSFMLaw(params)
        assert law.stress(-0.002) == pytest.approx(-30.0, rel=1e-9)

    def test_pre_peak(self, params):
        law = DSFMLaw(params)
        n = 0.8 + 30.0 / 17.0
        expected = -30.0 * n * 0.5 / (n - 1 + 0.5 ** n)
        assert law.stress(-0.001) == pytest.approx(expected, rel=1e-9)

    def test_post_peak_decay(self, params):
        law = DSFMLaw(params)
        n = 0.8 + 30.0 / 17.0
        k = 0.67 + 30.0 / 62.0
        expected = -30.0 * n * 1.5 / (n - 1 + 1.5 ** (n * k))
        assert law.stress(-0.003) == pytest.approx(expected, rel=1e-9)

    def test_softening_factor_range(self, params):
        law = DSFMLaw(params)
        for transverse in (0.0, 0.0002, 0.002, 0.02, 1.0):
            beta_d = law.softening_factor(-0.001, transverse)
            assert 0 < beta_d <= 1.0

    def test_softening_factor_value(self, params):
        cd = 0.35 * (2.0 - 0.28) ** 0.8
        with_slip = DSFMLaw(params, consider_crack_slip=True)
        without_slip = DSFMLaw(params, consider_crack_slip=False)
        assert with_slip.softening_factor(-0.001, 0.002) == pytest.approx(1 / (1 + 0.55 * cd))
        assert without_slip.softening_factor(-0.001, 0.002) == pytest.approx(1 / (1 + cd))

    def test_softening_factor_below_threshold(self, params):
        law = DSFMLaw(params)
        assert law.softening_factor(-0.001, 0.0002) == 1.0
        assert law.softening_factor(-0.001, -0.0005) == 1.0

    def test_softening_ratio_capped(self, params):
        law = DSFMLaw(params)
        cd = 0.35 * (400.0 - 0.28) ** 0.8
        assert law.softening_factor(-0.001, 1.0) == pytest.approx(1 / (1 + 0.55 * cd))

    def test_tension_softening_without_reinforcement(self, params):
        law = DSFMLaw(params)
        ets = 2 * 0.075 / (2.0 * 10.5)
        expected = 2.0 * (1 - (0.001 - 8.0e-5) / (ets - 8.0e-5))
        assert law.stress(0.001) == pytest.approx(expected, rel=1e-6)
        # fully softened
        assert law.stress(0.01) == 0.0

    def test_tension_stiffening_with_reinforcement(self, params, bars):
        law = DSFMLaw(params)
        m = bars.tension_stiffening_coefficient()
        expected = 2.0 / (1 + math.sqrt(2.2 * m * 0.01))
        assert law.stress(0.01, bars) == pytest.approx(expected, rel=1e-9)


# --------------------------------------------------------------------------
# SMM
# --------------------------------------------------------------------------
class TestSMM:
    def test_softening_coefficient(self, params):
        law = SMMLaw(params)
        assert law.softening_coefficient() == pytest.approx(0.9)
        assert law.softening_coefficient(0.002) == pytest.approx(0.9 / math.sqrt(1.8))
        # compressive transverse strain does not soften
        assert law.softening_coefficient(-0.002) == pytest.approx(0.9)

    def test_strength_function_low_strength(self):
        p = ConcreteParameters.custom(fc=64.0, ft=3.0, Ec=35000.0, ec=-0.0025, ecu=-0.0035)
        assert SMMLaw(p).softening_coefficient() == pytest.approx(5.8 / 8.0)

    def test_peak(self, params):
        law = SMMLaw(params)
        assert law.stress(-0.0018) == pytest.approx(-27.0, rel=1e-9)

    def test_pre_peak(self, params):
        law = SMMLaw(params)
        r = 0.001 / 0.0018
        assert law.stress(-0.001) == pytest.approx(-27.0 * (2 * r - r * r), rel=1e-9)

    def test_post_peak(self, params):
        law = SMMLaw(params)
        r = 0.004 / 0.0018
        expected = -27.0 * (1 - ((r - 1) / (4 / 0.9 - 1)) ** 2)
        assert law.stress(-0.004) == pytest.approx(expected, rel=1e-9)

    def test_post_peak_floor(self, params):
        law = SMMLaw(params)
        assert law.stress(-0.01) == pytest.approx(-13.5, rel=1e-9)
        assert law.stress(-0.05) == pytest.approx(-13.5, rel=1e-9)

    def test_cracked_tension(self, params):
        law = SMMLaw(params)
        assert law.stress(0.001) == pytest.approx(2.0 * (8.0e-5 / 0.001) ** 0.4, rel=1e-9)
        assert law.cracked

    def test_cracked_unloading_bounded_by_ft(self, params):
        law = SMMLaw(params)
        law.stress(0.001)
        assert law.stress(4.0e-5) == pytest.approx(2.0)
        assert law.cracked
