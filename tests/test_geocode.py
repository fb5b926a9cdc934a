import unittest
from types import SimpleNamespace
from unittest import mock

from geopy.exc import GeocoderServiceError, GeocoderTimedOut

from fieldroute import geocode
from fieldroute.geocode import geocode_address, geocode_stops
from fieldroute.geometry import Coordinate
from fieldroute.optimisation import Stop


class TestGeocodeAddress(unittest.TestCase):
    def setUp(self):
        geocode._lookup_address.cache_clear()
        self.client = mock.Mock()
        patcher = mock.patch.object(geocode, "_get_geocoder", return_value=self.client)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(geocode._lookup_address.cache_clear)

    def test_success(self):
        self.client.geocode.return_value = SimpleNamespace(latitude=45.4642, longitude=9.19)
        self.assertEqual(geocode_address("Piazza del Duomo, Milano"), Coordinate(45.4642, 9.19))

    def test_not_found(self):
        self.client.geocode.return_value = None
        self.assertIsNone(geocode_address("Nowhere street 0"))

    def test_retry_after_timeout(self):
        self.client.geocode.side_effect = [
            GeocoderTimedOut("slow"),
            SimpleNamespace(latitude=41.9028, longitude=12.4964),
        ]
        self.assertEqual(geocode_address("Roma"), Coordinate(41.9028, 12.4964))
        self.assertEqual(self.client.geocode.call_count, 2)
        second_timeout = self.client.geocode.call_args_list[1].kwargs["timeout"]
        first_timeout = self.client.geocode.call_args_list[0].kwargs["timeout"]
        self.assertEqual(second_timeout, first_timeout * 2)

    def test_second_failure_resolves_to_none(self):
        self.client.geocode.side_effect = [GeocoderTimedOut("slow"), GeocoderServiceError("down")]
        self.assertIsNone(geocode_address("Torino"))

    def test_network_failure_not_cached(self):
        self.client.geocode.side_effect = [
            GeocoderTimedOut("slow"),
            GeocoderTimedOut("still slow"),
            SimpleNamespace(latitude=45.4642, longitude=9.19),
        ]
        self.assertIsNone(geocode_address("Milano"))
        # the service is back; the earlier failure must not stick
        self.assertEqual(geocode_address("Milano"), Coordinate(45.4642, 9.19))
        self.assertEqual(self.client.geocode.call_count, 3)

    def test_not_found_is_cached(self):
        self.client.geocode.return_value = None
        self.assertIsNone(geocode_address("Atlantis"))
        self.assertIsNone(geocode_address("Atlantis"))
        self.assertEqual(self.client.geocode.call_count, 1)

    def test_blank_address_skips_request(self):
        self.assertIsNone(geocode_address("   "))
        self.client.geocode.assert_not_called()

    def test_results_are_cached(self):
        self.client.geocode.return_value = SimpleNamespace(latitude=1.0, longitude=2.0)
        geocode_address("Bologna")
        geocode_address("Bologna")
        self.assertEqual(self.client.geocode.call_count, 1)


class TestGeocodeStops(unittest.TestCase):
    def test_partitions_in_input_order(self):
        known = {"Milano": (45.4642, 9.19), "Roma": (41.9028, 12.4964)}
        stops = [Stop("Milano"), Stop("Atlantis"), Stop("Roma")]
        geocoded, failed = geocode_stops(stops, known.get)
        self.assertEqual([s.label for s in geocoded], ["Milano", "Roma"])
        self.assertEqual([s.label for s in failed], ["Atlantis"])
        self.assertEqual(stops[0].coordinate, Coordinate(45.4642, 9.19))
        self.assertIsInstance(stops[2].coordinate, Coordinate)
        self.assertIsNone(stops[1].coordinate)

    def test_existing_coordinates_not_looked_up(self):
        geocoder = mock.Mock(return_value=(1.0, 1.0))
        stop = Stop("Milano", coordinate=Coordinate(45.0, 9.0))
        geocoded, failed = geocode_stops([stop], geocoder)
        geocoder.assert_not_called()
        self.assertEqual(geocoded, [stop])
        self.assertEqual(failed, [])


if __name__ == "__main__":
    unittest.main()
