"""
Tests for the single-layer propagation formulas of Raytracer.
"""

import unittest
import numpy as np
import sys
from pathlib import Path

# Add root directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from georeferencing.dto import RaytracingConfigDTO
from georeferencing.raytracing import Raytracer
from georeferencing.errors import NumericalDomainError, RaytracingError


class TestConstantCelerity(unittest.TestCase):
    """Straight ray in an isovelocity layer."""
    
    def test_straight_ray(self):
        c = 1500.0
        p = np.cos(np.radians(60)) / c
        dz, dr, dt = Raytracer.constant_celerity_ray_tracing(0.0, 100.0, c, p)
        
        self.assertEqual(dz, 100.0)
        self.assertAlmostEqual(dt, 100.0 / (c * np.sin(np.radians(60))), places=12)
        self.assertAlmostEqual(dr / dz, 1.0 / np.tan(np.radians(60)), places=12)
    
    def test_layer_offset(self):
        """Only the layer thickness matters."""
        p = np.cos(np.radians(45)) / 1500.0
        shallow = Raytracer.constant_celerity_ray_tracing(0.0, 25.0, 1500.0, p)
        deep = Raytracer.constant_celerity_ray_tracing(300.0, 325.0, 1500.0, p)
        np.testing.assert_allclose(shallow, deep, rtol=1e-12)
    
    def test_horizontal_ray(self):
        with self.assertRaises(NumericalDomainError):
            Raytracer.constant_celerity_ray_tracing(0.0, 10.0, 1.0, 1.0)
    
    def test_cosine_out_of_domain(self):
        with self.assertRaises(NumericalDomainError) as ctx:
            Raytracer.constant_celerity_ray_tracing(0.0, 10.0, 1500.0, 1.01 / 1500.0)
        self.assertIsInstance(ctx.exception, RaytracingError)
        self.assertIsInstance(ctx.exception, ArithmeticError)


class TestConstantGradient(unittest.TestCase):
    """Circular ray in an isogradient layer."""
    
    def _subdivided(self, z0, z1, c0, gradient, p, n=20000):
        """Sum of thin isovelocity layers evaluated at their mid-depth speed."""
        edges = np.linspace(z0, z1, n + 1)
        total = np.zeros(3)
        for top, bottom in zip(edges[:-1], edges[1:]):
            c_mid = c0 + gradient * ((top + bottom) / 2 - z0)
            total += Raytracer.constant_celerity_ray_tracing(top, bottom, c_mid, p)
        return total
    
    def test_vertical_displacement(self):
        c0, c1, g = 1500.0, 1480.0, -0.4
        p = np.cos(np.radians(70)) / 1500.0
        dz, dr, dt = Raytracer.constant_gradient_ray_tracing(c0, c1, g, p)
        self.assertAlmostEqual(dz, 50.0, places=9)
        self.assertGreater(dr, 0)
        self.assertGreater(dt, 0)
    
    def test_matches_thin_layer_integration(self):
        for c0, g in [(1500.0, -0.4), (1480.0, 0.2), (1520.0, 0.05)]:
            z0, z1 = 10.0, 60.0
            c1 = c0 + g * (z1 - z0)
            p = np.cos(np.radians(55)) / 1500.0
            
            exact = Raytracer.constant_gradient_ray_tracing(c0, c1, g, p)
            approx = self._subdivided(z0, z1, c0, g, p)
            np.testing.assert_allclose(exact, approx, rtol=1e-6)
    
    def test_vertical_ray(self):
        c0, c1, g = 1500.0, 1510.0, 0.2
        dz, dr, dt = Raytracer.constant_gradient_ray_tracing(c0, c1, g, 0.0)
        self.assertAlmostEqual(dz, 50.0, places=9)
        self.assertEqual(dr, 0.0)
        self.assertAlmostEqual(dt, np.log(c1 / c0) / g, places=12)
    
    def test_ray_turning_inside_layer(self):
        """A shallow ray is refracted back up before reaching the layer bottom."""
        p = np.cos(np.radians(5)) / 1500.0
        with self.assertRaises(NumericalDomainError):
            Raytracer.constant_gradient_ray_tracing(1500.0, 1510.0, 0.2, p)
    
    def test_epsilon_boundary_continuity(self):
        """Just above epsilon the gradient formula agrees with the straight ray."""
        p = np.cos(np.radians(60)) / 1500.0
        z0, z1, c0 = 100.0, 150.0, 1500.0
        g = 2 * RaytracingConfigDTO().gradient_epsilon
        c1 = c0 + g * (z1 - z0)
        
        curved = Raytracer.constant_gradient_ray_tracing(c0, c1, g, p)
        straight = Raytracer.constant_celerity_ray_tracing(z0, z1, c0, p)
        np.testing.assert_allclose(curved, straight, rtol=1e-5)


class TestLastLayerPropagation(unittest.TestCase):
    
    def test_partial_layer(self):
        p = np.cos(np.radians(60)) / 1500.0
        dz, dr = Raytracer.last_layer_propagation(0.1, 1500.0, p)
        self.assertAlmostEqual(dr, 75.0, places=9)
        self.assertAlmostEqual(dz, 150.0 * np.sin(np.radians(60)), places=9)
    
    def test_zero_time(self):
        dz, dr = Raytracer.last_layer_propagation(0.0, 1500.0, 0.5 / 1500.0)
        self.assertEqual(dz, 0.0)
        self.assertEqual(dr, 0.0)
    
    def test_out_of_domain(self):
        with self.assertRaises(NumericalDomainError):
            Raytracer.last_layer_propagation(0.1, 1600.0, 1.0 / 1500.0)


if __name__ == '__main__':
    unittest.main()
