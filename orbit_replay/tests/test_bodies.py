"""
Tests for the planet catalog and planet placement.
"""
import unittest

import numpy as np

from orbit_replay import (
    Body,
    DEFAULT_PLANET_RECORDS,
    MU_SUN_AU_DAY,
    default_planets,
    load_bodies,
    visual_eccentricity,
)


class TestCatalog(unittest.TestCase):

    def test_default_catalog(self):
        bodies = load_bodies()
        self.assertEqual(list(bodies), ['Mercury', 'Venus', 'Earth', 'Mars', 'Jupiter', 'Saturn'])
        self.assertEqual(load_bodies([]).keys(), bodies.keys())

    def test_default_planets(self):
        planets = default_planets()
        self.assertEqual(len(planets), 6)
        self.assertEqual(list(planets)[0], 'Mercury')
        self.assertEqual(list(planets)[-1], 'Saturn')
        self.assertAlmostEqual(planets['Mars'].elements.a, 1.5237)
        self.assertEqual(list(load_bodies()), list(planets))
        self.assertEqual(list(load_bodies(None)), list(planets))

    def test_custom_catalog(self):
        bodies = load_bodies([{'name': 'Ceres', 'a': 2.77, 'e': 0.0785, 'i': 10.6,
                               'Omega': 80.3, 'omega': 73.6, 'M0': 95.9}])
        self.assertEqual(list(bodies), ['Ceres'])

    def test_degrees_converted_to_radians(self):
        body = Body.from_record({'name': 'X', 'a': 1.0, 'e': 0.0, 'i': 90.0,
                                 'Omega': 180.0, 'omega': 45.0, 'M0': 360.0})
        self.assertAlmostEqual(body.elements.i, np.pi / 2)
        self.assertAlmostEqual(body.elements.Omega, np.pi)
        self.assertAlmostEqual(body.elements.omega, np.pi / 4)
        self.assertAlmostEqual(body.elements.M, 2 * np.pi)

    def test_unbound_record_warns(self):
        with self.assertLogs('orbit_replay.bodies', level='WARNING'):
            Body.from_record({'name': 'Comet', 'a': 1.0, 'e': 1.2, 'i': 0.0,
                              'Omega': 0.0, 'omega': 0.0, 'M0': 0.0})


class TestPlacement(unittest.TestCase):

    def setUp(self):
        self.bodies = load_bodies()

    def test_earth_period_in_days(self):
        self.assertAlmostEqual(self.bodies['Earth'].period(), 365.2569, places=3)

    def test_position_repeats_after_one_period(self):
        mars = self.bodies['Mars']
        r0 = np.asarray(mars.position_at(0.0))
        r1 = np.asarray(mars.position_at(mars.period()))
        np.testing.assert_allclose(r1, r0, atol=1e-8)

    def test_position_on_orbit_path(self):
        earth = self.bodies['Earth']
        r = np.asarray(earth.position_at(123.4))
        a, e = earth.elements.a, earth.elements.e
        self.assertGreaterEqual(np.linalg.norm(r), a * (1 - e) - 1e-12)
        self.assertLessEqual(np.linalg.norm(r), a * (1 + e) + 1e-12)

    def test_position_uses_mean_anomaly_at_epoch(self):
        from orbit_replay import elements_to_cartesian

        venus = self.bodies['Venus']
        np.testing.assert_allclose(venus.position_at(0.0, mu=MU_SUN_AU_DAY),
                                   elements_to_cartesian(venus.elements), atol=1e-12)

    def test_orbit_path(self):
        path = self.bodies['Jupiter'].orbit_path()
        self.assertEqual(path.shape, (360, 3))

    def test_eccentricity_scaling_is_clamped(self):
        mercury = self.bodies['Mercury']
        self.assertAlmostEqual(mercury.display_elements(2.0).e, 2.0 * 0.2056)
        self.assertEqual(mercury.display_elements(10.0).e, 0.9)
        # The stored elements are untouched
        self.assertEqual(mercury.elements.e, 0.2056)

    def test_visual_eccentricity(self):
        self.assertAlmostEqual(visual_eccentricity(0.2, 4.0), 0.8)
        self.assertEqual(visual_eccentricity(0.3, 4.0), 0.9)
        self.assertEqual(visual_eccentricity(0.05), 0.05)

    def test_default_records_unchanged(self):
        load_bodies()
        self.assertEqual(DEFAULT_PLANET_RECORDS[2]['name'], 'Earth')


if __name__ == '__main__':
    unittest.main()
