"""
Tests for VariationSimulator component.

Tests cover:
- Boundary value analysis: perturbation always stays within [0, 500]
- Reproducibility with seeded generators
- Pollutant jitter ranges and precision
- Tree simulation: baseline untouched, wards and cities perturbed
"""

from unittest.mock import Mock

import numpy as np
import pytest

from conftest import make_city, make_pollutants, make_ward
from vayuwatch.pollutant_data import PollutantData
from vayuwatch.variation_simulator import VariationSimulator


def simulator_with_draws(*values):
    """Builds a simulator whose generator returns the given random() draws in order."""
    simulator = VariationSimulator()
    simulator.rng = Mock(spec=np.random.Generator)
    simulator.rng.random.side_effect = list(values)
    return simulator


class TestPerturb:
    """Test suite for perturb()."""

    # ==================== Boundary Value Analysis ====================

    def test_lowest_draw_gives_minus_delta(self):
        simulator = simulator_with_draws(0.0)
        assert simulator.perturb(100, 20) == 80

    def test_middle_draw_keeps_baseline(self):
        simulator = simulator_with_draws(0.5)
        assert simulator.perturb(100, 20) == 100

    def test_clamped_at_zero(self):
        simulator = simulator_with_draws(0.0)
        assert simulator.perturb(5, 20) == 0

    def test_clamped_at_500(self):
        simulator = simulator_with_draws(0.999)
        assert simulator.perturb(495, 20) == 500

    def test_half_rounds_up(self):
        """Boundary: an offset of exactly +0.5 rounds up."""
        simulator = simulator_with_draws(0.625)
        # (0.625 - 0.5) * 2 * 2 = 0.5
        assert simulator.perturb(100, 2) == 101

    @pytest.mark.parametrize("baseline,delta", [
        (0, 20), (500, 20), (-50, 20), (900, 20), (250, 10_000),
        (100, -20), (-900, -10_000), (250, float("inf")), (250, float("-inf")),
    ])
    def test_always_in_range(self, baseline, delta):
        """Property: output stays in [0, 500] for any sign or magnitude of baseline or delta."""
        simulator = VariationSimulator(rng=7)
        for _ in range(200):
            assert 0 <= simulator.perturb(baseline, delta) <= 500

    def test_negative_delta_mirrors_offset(self):
        simulator = simulator_with_draws(0.0)
        assert simulator.perturb(100, -20) == 120

    def test_infinite_delta_clamps_to_bounds(self):
        simulator = simulator_with_draws(0.0, 0.999)
        assert simulator.perturb(250, float("inf")) == 0
        assert simulator.perturb(250, float("inf")) == 500

    def test_seeded_runs_are_reproducible(self):
        first = VariationSimulator(rng=123)
        second = VariationSimulator(rng=123)
        assert [first.perturb(200, 20) for _ in range(10)] == \
            [second.perturb(200, 20) for _ in range(10)]


class TestPerturbPollutants:
    """Test suite for perturb_pollutants()."""

    def test_jitter_within_spread(self):
        simulator = VariationSimulator(rng=11)
        reading = PollutantData(pm25=100, pm10=200, no2=100, so2=100, co=2.0, o3=100, nh3=100, pb=0.3)
        for _ in range(100):
            result = simulator.perturb_pollutants(reading)
            assert 90 <= result.pm25 <= 110
            assert 180 <= result.pm10 <= 220
            assert 85 <= result.no2 <= 115
            assert 85 <= result.so2 <= 115
            assert 1.8 <= result.co <= 2.2
            assert 85 <= result.o3 <= 115
            assert 85 <= result.nh3 <= 115
            assert result.pb == 0.3

    def test_precision(self):
        simulator = VariationSimulator(rng=3)
        result = simulator.perturb_pollutants(make_pollutants())
        assert isinstance(result.pm25, int)
        assert round(result.co, 1) == result.co

    def test_missing_nh3_stays_missing(self):
        simulator = VariationSimulator(rng=3)
        result = simulator.perturb_pollutants(make_pollutants(nh3=None))
        assert result.nh3 is None
        assert result.validate() == (True, None)

    def test_lowest_draw_for_every_pollutant(self):
        simulator = simulator_with_draws(*([0.0] * 7))
        reading = PollutantData(pm25=100, pm10=100, no2=100, so2=100, co=1.0, o3=100, nh3=100)
        result = simulator.perturb_pollutants(reading)
        assert (result.pm25, result.pm10, result.no2, result.so2, result.co, result.o3, result.nh3) == \
            (90, 90, 85, 85, 0.9, 85, 85)


class TestSimulateTree:
    """Test suite for simulate_city() and simulate_states()."""

    def test_ward_delta_bounded(self):
        simulator = VariationSimulator(rng=5)
        ward = make_ward("w", 200)
        for _ in range(100):
            assert 185 <= simulator.simulate_ward(ward).aqi <= 215

    def test_city_and_wards_perturbed(self, fixed_now):
        simulator = VariationSimulator(rng=5)
        city = make_city("c", 200, wards=[make_ward("w1", 100), make_ward("w2", 300)])
        result = simulator.simulate_city(city, fixed_now)
        assert 180 <= result.aqi <= 220
        assert 85 <= result.wards[0].aqi <= 115
        assert 285 <= result.wards[1].aqi <= 315
        assert result.last_updated == fixed_now
        assert result.id == city.id
        assert result.population == city.population

    def test_baseline_is_not_mutated(self, small_forest, fixed_now):
        simulator = VariationSimulator(rng=9)
        before = [city.aqi for state in small_forest for city in state.cities]
        simulator.simulate_states(small_forest, fixed_now)
        after = [city.aqi for state in small_forest for city in state.cities]
        assert before == after

    def test_state_aqi_left_for_aggregator(self, small_forest, fixed_now):
        simulator = VariationSimulator(rng=9)
        result = simulator.simulate_states(small_forest, fixed_now)
        assert [state.aqi for state in result] == [state.aqi for state in small_forest]
        assert len(result[0].cities) == 2
        assert all(city.last_updated == fixed_now for state in result for city in state.cities)

    def test_defaults_timestamp_to_now(self, small_forest):
        result = VariationSimulator(rng=1).simulate_states(small_forest)
        assert result[0].cities[0].last_updated is not None
