import unittest
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from storm_alerts.models import ExtractedHazard, RawAlert
from storm_alerts.services.classifier import classify
from storm_alerts.services.consolidation import consolidate


def storm(area, hail=0.0, wind=0.0, event_type="Severe Thunderstorm Warning"):
    alert = RawAlert(event_type=event_type, headline="", area_description=area)
    return classify(alert, ExtractedHazard(hail_inches=hail, wind_mph=wind), "Texas")


class TestConsolidation(unittest.TestCase):

    def test_empty_input_yields_no_digests(self):
        digests = consolidate([])
        self.assertIsNone(digests.hail)
        self.assertIsNone(digests.wind)
        self.assertEqual(list(digests.items()), [])

    def test_partition_by_category(self):
        hail_storm = storm("Lubbock, TX", hail=1.75)
        wind_storm = storm("Dallas, TX", wind=70)
        digests = consolidate([hail_storm, wind_storm])

        self.assertEqual(digests.hail.member_storms, [hail_storm])
        self.assertEqual(digests.hail.max_hail_inches, 1.75)
        self.assertEqual(digests.hail.affected_areas, ["Lubbock, TX"])
        self.assertEqual(digests.wind.member_storms, [wind_storm])
        self.assertEqual(digests.wind.max_wind_mph, 70)

    def test_storm_qualifying_on_both_axes_feeds_both_digests(self):
        both = storm("Amarillo, TX", hail=2.0, wind=65)
        digests = consolidate([both])
        self.assertIn(both, digests.hail.member_storms)
        self.assertIn(both, digests.wind.member_storms)

    def test_hurricane_feeds_wind_digest(self):
        hurricane = storm("Harris, TX", wind=0, event_type="Hurricane Warning")
        digests = consolidate([hurricane])
        self.assertIsNone(digests.hail)
        self.assertEqual(digests.wind.member_storms, [hurricane])

    def test_maximum_and_area_union(self):
        storms = [
            storm("Lubbock, TX", hail=1.0),
            storm("Lubbock, TX", hail=2.5),
            storm("Midland, TX", hail=1.25),
        ]
        digests = consolidate(storms)
        self.assertEqual(digests.hail.max_hail_inches, 2.5)
        self.assertEqual(digests.hail.affected_areas, ["Lubbock, TX", "Midland, TX"])
        self.assertEqual(len(digests.hail.member_storms), 3)
        self.assertIsNone(digests.wind)
        self.assertEqual(digests.hail.region, "Texas")


if __name__ == '__main__':
    unittest.main()
