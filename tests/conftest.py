"""Shared fixtures for the pyodm test suite.

Provides a ground station, a satellite state visible from it and the
measurement participants built on top of them.
"""

import numpy as np
import pytest

from pyodm.coordinate.frames import GCRF
from pyodm.gnss.ambiguity import AmbiguityCache
from pyodm.observation.observers import GroundStation
from pyodm.satellite.observable_satellite import ObservableSatellite
from pyodm.satellite.spacecraft_state import SpacecraftState

# ---------------------------------------------------------------------------
# Scenario constants
# ---------------------------------------------------------------------------
DATE = 1000.0
STATION_LLH = np.array([np.radians(35.0), np.radians(139.0), 50.0])
SLANT_RANGE = 1.2e6
ORBIT_SPEED = 7.5e3


def visible_state(station, date=DATE, frame=GCRF):
    """LEO state about 54 degrees above the station horizon."""
    station_position = station.get_pv_coordinates(date, frame).position
    east, north, zenith = station.get_topocentric_axes(frame, date)
    line_of_sight = 0.3 * east + 0.5 * north + 0.8 * zenith
    line_of_sight /= np.linalg.norm(line_of_sight)
    position = station_position + SLANT_RANGE * line_of_sight
    along_track = np.cross([0.0, 0.0, 1.0], position)
    velocity = ORBIT_SPEED * along_track / np.linalg.norm(along_track)
    return SpacecraftState(date, position, velocity, frame)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def station():
    """Ground station with zero clock and zero displacement."""
    return GroundStation("station", STATION_LLH)


@pytest.fixture
def satellite():
    """Observable satellite at propagator index 0."""
    return ObservableSatellite(0, "leo")


@pytest.fixture
def leo_state(station):
    """GCRF state of the satellite, visible from ``station`` at DATE."""
    return visible_state(station)


@pytest.fixture
def date():
    """Measurement date of the scenario."""
    return DATE


@pytest.fixture
def state_factory():
    """Builder of visible states, in any pseudo-inertial frame."""
    return visible_state


@pytest.fixture
def ambiguity_cache():
    return AmbiguityCache()
