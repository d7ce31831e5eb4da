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
Quantities shared by all one-way downlink measurements.

Every observable between a remote observer and a tracked spacecraft needs
the same preliminary work: clock offsets, the reception date corrected for
the spacecraft clock, the light time of the downlink and the spacecraft
state at transit. These are computed once per evaluation and packaged in an
immutable snapshot, in the value lane or in the derivative lane.

The algorithm, identical in both lanes:

1. local (measured spacecraft) clock offset at the nominal reception date
2. reception date corrected by the local clock offset, unless the caller
   says it is already applied
3. light time between the spacecraft trajectory and the observer position
   at the corrected reception date, giving the transit date and state
4. remote (observer) clock offset at the corrected reception date
5. snapshot
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..autodiff.gradient import Gradient
from ..autodiff.ops import value_of
from ..core.exceptions import ConfigurationError
from ..estimation.parameter_driver import ParameterDriver
from ..estimation.parameter_indices import ParameterIndexMap
from ..satellite.clock import ClockOffset
from ..satellite.observable_satellite import ObservableSatellite
from ..satellite.providers import AbsolutePVCoordinates
from ..satellite.pv_coordinates import PVCoordinates
from ..satellite.spacecraft_state import SpacecraftState
from ..signal.travel_time_model import SignalTravelTimeModel
from .observers import Observer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommonParametersWithoutDerivatives:
    """Value lane snapshot"""
    state: SpacecraftState
    tau_d: float
    local_offset: ClockOffset
    remote_offset: ClockOffset
    transit_state: SpacecraftState
    transit_pv: PVCoordinates
    remote_pv: PVCoordinates


@dataclass(frozen=True)
class CommonParametersWithDerivatives:
    """Derivative lane snapshot, ``tau_d`` and the PVs carry gradients"""
    state: SpacecraftState
    tau_d: Gradient
    local_offset: ClockOffset
    remote_offset: ClockOffset
    transit_state: SpacecraftState
    transit_pv: PVCoordinates
    remote_pv: PVCoordinates
    indices: ParameterIndexMap

    @property
    def free_parameters(self) -> int:
        return self.indices.free_parameters


def _select_state(states: Sequence[SpacecraftState], satellite: ObservableSatellite) -> SpacecraftState:
    state = satellite.select_state(states)
    if not state.frame.is_pseudo_inertial():
        logger.error(f"State of {satellite.name} given in non pseudo-inertial frame {state.frame.name}")
        raise ConfigurationError(f"Frame {state.frame.name} is not pseudo-inertial")
    return state


def compute_remote_parameters_without(observer: Observer,
                                      states: Sequence[SpacecraftState],
                                      satellite: ObservableSatellite,
                                      date: float,
                                      clock_offset_already_applied: bool = False,
                                      travel_time_model: Optional[SignalTravelTimeModel] = None
                                      ) -> CommonParametersWithoutDerivatives:
    """
    Common parameters in the value lane.

    Parameters
    ----------
    observer : Observer
        Remote end (signal receiver)
    states : sequence of SpacecraftState
        States of all propagated spacecraft at the measurement date
    satellite : ObservableSatellite
        Measured spacecraft (signal emitter)
    date : float
        Nominal reception date
    clock_offset_already_applied : bool
        Skip the reception date correction
    travel_time_model : SignalTravelTimeModel, optional
        Light time settings, vacuum light speed by default

    Raises
    ------
    ConfigurationError
        Non pseudo-inertial state frame
    MissingSatelliteError
        Satellite not in ``states``
    """
    state = _select_state(states, satellite)
    model = travel_time_model if travel_time_model is not None else SignalTravelTimeModel()
    frame = state.frame

    local_offset = satellite.clock.get_offset(date)
    corrected = date if clock_offset_already_applied else date - local_offset.offset

    remote_pv = observer.get_pv_coordinates(corrected, frame)

    emitter = AbsolutePVCoordinates(frame, state.pv)
    tau_d = model.get_adjustable_emitter_computer(emitter).compute_delay(
        state.date, remote_pv.position, corrected, frame)

    delta = corrected - state.date
    transit_pv = state.pv.shifted_by(delta - tau_d)
    transit_state = state.shifted_by(delta - tau_d)

    remote_offset = observer.clock.get_offset(corrected)

    return CommonParametersWithoutDerivatives(state, tau_d, local_offset, remote_offset,
                                              transit_state, transit_pv, remote_pv)


def compute_remote_parameters_with(observer: Observer,
                                   states: Sequence[SpacecraftState],
                                   satellite: ObservableSatellite,
                                   date: float,
                                   clock_offset_already_applied: bool,
                                   drivers: Sequence[ParameterDriver],
                                   travel_time_model: Optional[SignalTravelTimeModel] = None
                                   ) -> CommonParametersWithDerivatives:
    """
    Common parameters in the derivative lane.

    Same as :func:`compute_remote_parameters_without`, with the spacecraft
    state seeded at slots ``6 * propagator_index`` and the selected spans of
    ``drivers`` seeded after the state block of every spacecraft.
    """
    state = _select_state(states, satellite)
    model = travel_time_model if travel_time_model is not None else SignalTravelTimeModel()
    frame = state.frame

    indices = ParameterIndexMap(drivers, len(states))
    n = indices.free_parameters
    pv = state.to_gradient_pv(n, indices.state_index(satellite.propagator_index))

    local_offset = satellite.clock.get_offset_gradient(date, n, indices)
    corrected = Gradient.constant(n, date)
    if not clock_offset_already_applied:
        corrected = corrected - local_offset.offset

    remote_pv = observer.get_gradient_provider(n, indices).get_pv_coordinates(corrected, frame)

    emitter = AbsolutePVCoordinates(frame, pv)
    tau_d = model.get_adjustable_emitter_computer(emitter).compute_delay(
        pv.date, remote_pv.position, corrected, frame)

    delta = corrected - pv.date
    transit_pv = pv.shifted_by(delta - tau_d)
    transit_state = state.shifted_by(value_of(delta - tau_d))

    remote_offset = observer.clock.get_offset_gradient(corrected, n, indices)

    return CommonParametersWithDerivatives(state, tau_d, local_offset, remote_offset,
                                           transit_state, transit_pv, remote_pv, indices)
