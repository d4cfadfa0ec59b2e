"""
Tests for raytrace plotting.
"""

import unittest
import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend for testing
import matplotlib.pyplot as plt
import sys
from pathlib import Path

# Add root directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from georeferencing.dto import PingDTO
from georeferencing.raytracing import Raytracer
from georeferencing.svp import SoundVelocityProfile
from georeferencing.visualization import plot_planar_ray


class TestPlotPlanarRay(unittest.TestCase):
    
    def setUp(self):
        svp = SoundVelocityProfile.from_samples([(0.0, 1500.0), (50.0, 1480.0), (200.0, 1510.0)])
        ping = PingDTO(along_track_angle=20.0, across_track_angle=0.0, two_way_travel_time=0.3,
                       surface_sound_speed=1500.0)
        self.result = Raytracer().planar_ray_trace(ping, svp, np.eye(3), np.eye(3))
    
    def tearDown(self):
        plt.close('all')
    
    def test_polyline(self):
        fig, ax = plt.subplots()
        returned = plot_planar_ray(self.result, ax=ax)
        
        self.assertIs(returned, ax)
        line = ax.get_lines()[0]
        self.assertEqual(len(line.get_xdata()), len(self.result.layers) + 1)
        self.assertAlmostEqual(line.get_xdata()[-1], self.result.delta_r, places=9)
        self.assertAlmostEqual(line.get_ydata()[-1], self.result.delta_z, places=9)
        self.assertTrue(ax.yaxis_inverted())
    
    def test_current_axes(self):
        ax = plot_planar_ray(self.result, c='r')
        self.assertIs(ax, plt.gca())
        # a second plot on the same axes keeps depth pointing down
        plot_planar_ray(self.result, ax=ax)
        self.assertTrue(ax.yaxis_inverted())


if __name__ == '__main__':
    unittest.main()
