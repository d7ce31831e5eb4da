# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Finite difference validation of measurement derivatives.

For a measurement and a set of states, these helpers compare the analytic
derivatives of the derivative lane against central finite differences of
the value lane:

    d/dx ~ (f(x + h) - f(x - h)) / 2h

Results are returned as pandas DataFrames with one row per measurement
component and perturbed variable, so that a consistency check reduces to
a filter on the ``rel_error`` column.

Example Usage:
    >>> report = check_state_derivatives(measurement, [state])
    >>> assert report['rel_error'].max() < 1e-6
"""

import logging
from typing import Dict, Optional, Sequence

import numpy as np
import pandas as pd

from ..core.constants import STATE_DIMENSION
from ..satellite.spacecraft_state import SpacecraftState

logger = logging.getLogger(__name__)

STATE_COMPONENTS = ("x", "y", "z", "vx", "vy", "vz")
REPORT_COLUMNS = ["output", "component", "analytic", "finite_difference", "abs_error", "rel_error"]


def _relative_errors(analytic: np.ndarray, finite_difference: np.ndarray):
    abs_error = np.abs(analytic - finite_difference)
    magnitude = np.maximum(np.abs(analytic), np.abs(finite_difference))
    with np.errstate(divide='ignore', invalid='ignore'):
        rel_error = np.where(magnitude > 0.0, abs_error / magnitude, 0.0)
    return abs_error, rel_error


def _report(rows) -> pd.DataFrame:
    df = pd.DataFrame(rows, columns=REPORT_COLUMNS[:4])
    df['abs_error'], df['rel_error'] = _relative_errors(df['analytic'].to_numpy(),
                                                        df['finite_difference'].to_numpy())
    return df


def _evaluate(measurement, states) -> np.ndarray:
    return measurement.evaluate_value(0, 0, states).estimated_value


def check_state_derivatives(measurement, states: Sequence[SpacecraftState],
                            position_step: float = 1.0,
                            velocity_step: float = 1.0e-3) -> pd.DataFrame:
    """
    Compare state derivatives with central finite differences.

    Parameters
    ----------
    measurement : ObservedMeasurement
        Measurement to check
    states : sequence of SpacecraftState
        Evaluation states
    position_step : float
        Position perturbation (m)
    velocity_step : float
        Velocity perturbation (m/s)

    Returns
    -------
    pd.DataFrame
        Columns: output (measurement component), component (satellite rank
        and state variable, e.g. ``0:vx``), analytic, finite_difference,
        abs_error, rel_error
    """
    estimated = measurement.evaluate_with_derivatives(0, 0, states)
    steps = np.array([position_step] * 3 + [velocity_step] * 3)

    rows = []
    for k, satellite in enumerate(measurement.satellites):
        analytic = estimated.get_state_derivatives(k)
        state = states[satellite.propagator_index]
        base = state.to_vector()

        finite_difference = np.zeros((measurement.dimension, STATE_DIMENSION))
        for j in range(STATE_DIMENSION):
            perturbed = list(states)
            offset = np.zeros(STATE_DIMENSION)
            offset[j] = steps[j]
            perturbed[satellite.propagator_index] = SpacecraftState.from_vector(
                state.date, base + offset, state.frame, state.mu)
            plus = _evaluate(measurement, perturbed)
            perturbed[satellite.propagator_index] = SpacecraftState.from_vector(
                state.date, base - offset, state.frame, state.mu)
            minus = _evaluate(measurement, perturbed)
            finite_difference[:, j] = (plus - minus) / (2.0 * steps[j])

        for i in range(measurement.dimension):
            for j in range(STATE_DIMENSION):
                rows.append((i, f"{k}:{STATE_COMPONENTS[j]}", analytic[i, j], finite_difference[i, j]))

    report = _report(rows)
    logger.debug(f"{measurement.measurement_type} state derivatives: "
                 f"max rel error {report['rel_error'].max():.3e}")
    return report


def _probe_date(span, date: float) -> float:
    if span.contains(date):
        return date
    if np.isfinite(span.start):
        return span.start
    return span.end - 1.0


def check_parameter_derivatives(measurement, states: Sequence[SpacecraftState],
                                steps: Optional[Dict[str, float]] = None) -> pd.DataFrame:
    """
    Compare parameter derivatives with central finite differences.

    Only the selected drivers of the measurement are checked, one row per
    span and measurement component. Driver values are restored afterwards.

    Parameters
    ----------
    measurement : ObservedMeasurement
        Measurement to check
    states : sequence of SpacecraftState
        Evaluation states
    steps : dict, optional
        Perturbation per driver name, the driver scale by default

    Returns
    -------
    pd.DataFrame
        Same columns as :func:`check_state_derivatives`, ``component`` being
        the span name
    """
    steps = steps or {}
    estimated = measurement.evaluate_with_derivatives(0, 0, states)

    rows = []
    for driver in measurement.parameter_drivers:
        if not driver.is_selected():
            continue
        h = steps.get(driver.name, driver.scale)
        for span in driver.spans:
            probe = _probe_date(span, measurement.date)
            analytic = estimated.get_parameter_derivatives(driver, probe)
            value = span.value
            try:
                driver.set_value(value + h, probe)
                plus = _evaluate(measurement, states)
                driver.set_value(value - h, probe)
                minus = _evaluate(measurement, states)
            finally:
                driver.set_value(value, probe)
            finite_difference = (plus - minus) / (2.0 * h)
            for i in range(measurement.dimension):
                rows.append((i, span.name, analytic[i], finite_difference[i]))

    report = _report(rows)
    if len(report):
        logger.debug(f"{measurement.measurement_type} parameter derivatives: "
                     f"max rel error {report['rel_error'].max():.3e}")
    return report
