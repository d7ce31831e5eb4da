"""Tests for the finite difference derivative reports."""

import numpy as np
import pandas as pd

from pyodm.estimation.diagnostics import (
    REPORT_COLUMNS,
    check_parameter_derivatives,
    check_state_derivatives,
)
from pyodm.observation import AngularAzEl


def _measurement(date, station, satellite):
    return AngularAzEl(station, date, [0.5, 0.9], [1.0e-5, 1.0e-5], [1.0, 1.0], satellite)


class TestDerivativeReports:

    def test_state_report_layout(self, date, station, satellite, leo_state):
        report = check_state_derivatives(_measurement(date, station, satellite), [leo_state],
                                         velocity_step=1.0)
        assert isinstance(report, pd.DataFrame)
        assert list(report.columns) == REPORT_COLUMNS
        assert list(report['component'][:6]) == ["0:x", "0:y", "0:z", "0:vx", "0:vy", "0:vz"]
        assert (report['rel_error'] >= 0.0).all()

    def test_parameter_report_restores_values(self, date, station, satellite, leo_state):
        measurement = _measurement(date, station, satellite)
        station.north_driver.set_value(2.5)
        station.north_driver.set_selected(True)
        report = check_parameter_derivatives(measurement, [leo_state], steps={"station-North": 0.5})
        assert list(report['component']) == ["station-North", "station-North"]
        assert station.north_driver.get_value() == 2.5

    def test_no_selected_driver(self, date, station, satellite, leo_state):
        report = check_parameter_derivatives(_measurement(date, station, satellite), [leo_state])
        assert report.empty

    def test_split_driver_is_checked_per_span(self, date, station, satellite, leo_state):
        measurement = _measurement(date, station, satellite)
        driver = station.east_driver
        driver.add_span_at_date(date + 3600.0)
        driver.set_selected(True)
        report = check_parameter_derivatives(measurement, [leo_state])
        assert len(report) == 4
        later = report[report['component'] == driver.get_span_name(date + 7200.0)]
        # the measurement only sees the span valid at its date
        np.testing.assert_array_equal(later['analytic'], [0.0, 0.0])
        np.testing.assert_array_equal(later['finite_difference'], [0.0, 0.0])
