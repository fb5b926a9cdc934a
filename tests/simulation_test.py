import unittest
import random

from fieldroute.geometry import Coordinate, centroid
from fieldroute.optimisation import ExplicitStop, Stop, build_tour
from fieldroute.ranking import PointOfInterest, rank_pois


class TestSimulation(unittest.TestCase):
    def test_random_cases(self):
        # Run a handful of random routes through tour construction and
        # lodging ranking and check the structural guarantees hold.
        rng = random.Random(42)
        for _ in range(10):
            n = rng.randint(3, 12)
            stops = []
            for i in range(n):
                # random coordinates around Milan (lat 45.3-45.6, lon 9.0-9.3)
                lat = 45.3 + rng.random() * 0.3
                lon = 9.0 + rng.random() * 0.3
                stops.append(Stop(label=f"Stop {i}", coordinate=Coordinate(lat, lon)))
            start = rng.choice(stops)
            tour = build_tour(stops, ExplicitStop(start.stop_id))
            self.assertEqual(len(tour), n)
            self.assertEqual({id(s) for s in tour}, {id(s) for s in stops})
            self.assertIs(tour[0], start)
            self.assertEqual(tour, build_tour(stops, ExplicitStop(start.stop_id)))

            center = centroid(s.coordinate for s in tour)
            candidates = [
                PointOfInterest(f"Hotel {j}", "", Coordinate(45.3 + rng.random() * 0.3, 9.0 + rng.random() * 0.3), "hotel")
                for j in range(rng.randint(1, 30))
            ]
            ranked = rank_pois(candidates, center, tour[-1].coordinate)
            self.assertEqual(len(ranked), min(20, len(candidates)))
            keys = [p.secondary_distance_km for p in ranked]
            self.assertEqual(keys, sorted(keys))


if __name__ == "__main__":
    unittest.main()
