"""Tests for parameter drivers and their validity spans."""

import numpy as np
import pytest

from pyodm.core.exceptions import ConfigurationError
from pyodm.estimation.parameter_driver import ParameterDriver


class TestDriverValues:

    def test_defaults(self):
        driver = ParameterDriver("bias", 2.0)
        assert driver.get_value() == 2.0
        assert not driver.is_selected()
        assert driver.get_nb_of_values() == 1
        assert driver.get_span_names() == ["bias"]

    def test_bounds_are_enforced(self):
        driver = ParameterDriver("bias", 0.0, min_value=-1.0, max_value=1.0)
        driver.set_value(5.0)
        assert driver.get_value() == 1.0
        driver.set_value(-5.0)
        assert driver.get_value() == -1.0

    def test_normalized_value(self):
        driver = ParameterDriver("clock", 1.0e-6, scale=1.0e-6)
        driver.set_normalized_value(2.0)
        assert driver.get_value() == pytest.approx(3.0e-6)
        assert driver.get_normalized_value() == pytest.approx(2.0)
        driver.reset_to_reference()
        assert driver.get_value() == 1.0e-6

    @pytest.mark.parametrize("kwargs", [{"scale": 0.0}, {"min_value": 1.0, "max_value": -1.0}])
    def test_invalid_configuration(self, kwargs):
        with pytest.raises(ConfigurationError):
            ParameterDriver("bad", **kwargs)


class TestDriverSpans:

    def test_split_renames_spans(self):
        driver = ParameterDriver("clk", 1.0)
        driver.add_span_at_date(100.0)
        assert driver.get_span_names() == ["SpanclkStart", "Spanclk+100.000000"]
        assert driver.get_span_name(50.0) == "SpanclkStart"
        assert driver.get_span_name(100.0) == "Spanclk+100.000000"

    def test_split_keeps_values_and_isolates_updates(self):
        driver = ParameterDriver("clk", 1.0)
        driver.add_span_at_date(100.0)
        assert driver.get_value(0.0) == 1.0
        assert driver.get_value(200.0) == 1.0
        driver.set_value(3.0, 150.0)
        assert driver.get_value(0.0) == 1.0
        assert driver.get_value(150.0) == 3.0

    def test_split_at_existing_boundary_is_noop(self):
        driver = ParameterDriver("clk")
        driver.add_span_at_date(10.0)
        driver.add_span_at_date(10.0)
        assert driver.get_nb_of_values() == 2

    def test_add_spans(self):
        driver = ParameterDriver("clk")
        driver.add_spans(0.0, 300.0, 100.0)
        assert [s.start for s in driver.spans] == [-np.inf, 100.0, 200.0]

    def test_value_without_date_requires_single_span(self):
        driver = ParameterDriver("clk")
        driver.add_span_at_date(10.0)
        with pytest.raises(ConfigurationError):
            driver.get_value()

    def test_invalid_split(self):
        driver = ParameterDriver("clk")
        with pytest.raises(ConfigurationError):
            driver.add_span_at_date(np.inf)
        with pytest.raises(ConfigurationError):
            driver.add_spans(0.0, 10.0, 0.0)


class TestDriverGradient:

    def test_active_span_is_seeded(self):
        driver = ParameterDriver("clk", 4.0)
        g = driver.get_gradient(8, {"clk": 6})
        assert g.value == 4.0
        np.testing.assert_array_equal(g.get_gradient(), np.eye(8)[6])

    def test_inactive_span_is_constant(self):
        driver = ParameterDriver("clk", 4.0)
        g = driver.get_gradient(8, {})
        assert g.value == 4.0
        assert not g.get_gradient().any()

    def test_span_selected_by_date(self):
        driver = ParameterDriver("clk", 1.0)
        driver.add_span_at_date(100.0)
        driver.set_value(2.0, 150.0)
        indices = {"Spanclk+100.000000": 7}
        assert not driver.get_gradient(8, indices, 50.0).get_gradient().any()
        late = driver.get_gradient(8, indices, 150.0)
        assert late.value == 2.0
        assert late.get_partial_derivative(7) == 1.0
