#!/usr/bin/env python3
"""Test suite for physical constants"""

import unittest
import numpy as np
from pyodm.core.constants import (
    CLIGHT, FREQ_L1, FREQ_L2, FREQ_L5,
    RE_WGS84, FE_WGS84, OMGE, GME,
    FRAME_BIAS_DALPHA0, OBLIQUITY_J2000, AS2R,
    MAX_LIGHT_TIME_ITER, LIGHT_TIME_ULPS, STATE_DIMENSION
)


class TestPhysicalConstants(unittest.TestCase):
    """Test physical constants values"""

    def test_speed_of_light(self):
        """Test speed of light constant"""
        self.assertEqual(CLIGHT, 299792458.0)

    def test_gps_frequencies(self):
        """Test GPS frequency constants"""
        self.assertAlmostEqual(FREQ_L1, 1575.42e6, delta=1e6)
        self.assertAlmostEqual(FREQ_L2, 1227.60e6, delta=1e6)
        self.assertAlmostEqual(FREQ_L5, 1176.45e6, delta=1e6)

        # L1 wavelength ~19 cm
        self.assertAlmostEqual(CLIGHT / FREQ_L1, 0.1903, places=4)

    def test_earth_parameters(self):
        """Test Earth parameters"""
        self.assertAlmostEqual(RE_WGS84, 6378137.0, delta=1.0)
        self.assertAlmostEqual(FE_WGS84, 1.0/298.257223563, delta=1e-9)
        self.assertAlmostEqual(OMGE, 7.2921151467e-5, delta=1e-10)
        self.assertAlmostEqual(GME, 3.986004418e14, delta=1e6)

    def test_frame_angles(self):
        """Test frame bias and obliquity"""
        # Frame bias is a few milliarcseconds
        self.assertLess(abs(FRAME_BIAS_DALPHA0), 0.1 * AS2R)

        # Obliquity ~23.44 degrees
        self.assertAlmostEqual(np.degrees(OBLIQUITY_J2000), 23.4393, places=3)


class TestModelParameters(unittest.TestCase):
    """Test tracking model settings"""

    def test_light_time_iteration(self):
        self.assertEqual(MAX_LIGHT_TIME_ITER, 10)
        self.assertGreater(LIGHT_TIME_ULPS, 0.0)

    def test_state_dimension(self):
        self.assertEqual(STATE_DIMENSION, 6)


if __name__ == '__main__':
    unittest.main()
