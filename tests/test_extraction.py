import unittest
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from storm_alerts.services.extraction import extract, resolve, Bulletin, WIND_STRATEGIES


class TestHazardExtraction(unittest.TestCase):

    def test_structured_line_wins_over_phrased(self):
        description = (
            "At 402 PM MDT, a severe thunderstorm was located near Dodge City.\n"
            "Hail up to 0.75 inches in diameter is possible.\n\n"
            "MAX HAIL SIZE...1.5 IN\n"
            "MAX WIND GUST...60 MPH"
        )
        hazard = extract("Severe Thunderstorm Warning", "", description)
        self.assertEqual(hazard.hail_inches, 1.5)
        self.assertEqual(hazard.hail_source, "structured")
        self.assertEqual(hazard.wind_mph, 60)

    def test_structured_takes_maximum_of_all_occurrences(self):
        description = "HAIL...0.75IN\nWIND...60MPH\n\nHAIL...1.25IN\nWIND...70MPH"
        hazard = extract("Severe Thunderstorm Warning", "", description)
        self.assertEqual(hazard.hail_inches, 1.25)
        self.assertEqual(hazard.wind_mph, 70)

    def test_structured_value_wrapped_across_lines(self):
        hazard = extract("Severe Thunderstorm Warning", "", "MAX HAIL SIZE...1.00\nIN")
        self.assertEqual(hazard.hail_inches, 1.0)

    def test_api_parameters_are_structured(self):
        hazard = extract(
            "Severe Thunderstorm Warning",
            "",
            "Hail up to 0.50 inches possible.",
            {"maxHailSize": ["1.75"], "maxWindGust": ["70 MPH"]},
        )
        self.assertEqual(hazard.hail_inches, 1.75)
        self.assertEqual(hazard.wind_mph, 70)
        self.assertEqual(hazard.hail_source, "structured")

    def test_phrased_mentions(self):
        hazard = extract(
            "Special Weather Statement",
            "",
            "Hail up to 1.0 inches in diameter and winds up to 60 mph are possible.",
        )
        self.assertEqual(hazard.hail_inches, 1.0)
        self.assertEqual(hazard.hail_source, "phrased")
        self.assertEqual(hazard.wind_mph, 60)
        self.assertEqual(hazard.wind_source, "phrased")

    def test_phrased_takes_maximum_and_reads_headline(self):
        hazard = extract(
            "Severe Thunderstorm Warning",
            "Wind gusts up to 65 mph expected",
            "Wind gusts of 50 mph and 1.75 inch hail reported.",
        )
        self.assertEqual(hazard.wind_mph, 65)
        self.assertEqual(hazard.hail_inches, 1.75)

    def test_bare_mph_fallback_requires_wind_context(self):
        text = "HAZARD...60 mph wind gusts and quarter size hail."
        with_context = extract("Severe Thunderstorm Warning", "", text)
        self.assertEqual(with_context.wind_mph, 60)
        self.assertEqual(with_context.wind_source, "bare_mph")

        without_context = extract("Flood Advisory", "Flood Advisory", text)
        self.assertEqual(without_context.wind_mph, 0)
        self.assertIsNone(without_context.wind_source)

    def test_number_right_after_field_marker(self):
        wind = extract("Severe Thunderstorm Warning", "", "HAZARD...60 mph wind gusts.")
        self.assertEqual(wind.wind_mph, 60)
        self.assertEqual(wind.wind_source, "bare_mph")

        spaced = extract("Severe Thunderstorm Warning", "", "HAZARD... 60 mph wind gusts.")
        self.assertEqual(spaced.wind_mph, 60)

        hail = extract("Severe Thunderstorm Warning", "", "HAZARD...2 inch hail.")
        self.assertEqual(hail.hail_inches, 2)
        self.assertEqual(hail.hail_source, "phrased")

        structured = extract("Severe Thunderstorm Warning", "", "HAIL...1.75IN\nWIND...60MPH")
        self.assertEqual((structured.hail_inches, structured.wind_mph), (1.75, 60))

    def test_leading_decimal_point_still_parses(self):
        hazard = extract("Severe Thunderstorm Warning", "", "Hail up to .75 inches possible.")
        self.assertEqual(hazard.hail_inches, 0.75)

    def test_api_parameter_after_field_marker(self):
        hazard = extract("Severe Thunderstorm Warning", "", "", {"maxWindGust": ["Up to...65 MPH"]})
        self.assertEqual(hazard.wind_mph, 65)

    def test_bare_mph_not_used_when_phrased_matches(self):
        hazard = extract(
            "High Wind Warning",
            "",
            "Wind gusts up to 45 mph. Isolated 90 mph gusts on ridge tops.",
        )
        self.assertEqual(hazard.wind_mph, 45)

    def test_no_bare_fallback_for_hail(self):
        hazard = extract("Severe Thunderstorm Warning", "", "Rainfall of 1.5 inches expected.")
        self.assertEqual(hazard.hail_inches, 0)

    def test_no_match_yields_zero(self):
        hazard = extract("Dense Fog Advisory", "", "Visibility one quarter mile or less.")
        self.assertEqual(hazard.hail_inches, 0)
        self.assertEqual(hazard.wind_mph, 0)
        self.assertIsNone(hazard.hail_source)
        self.assertIsNone(hazard.wind_source)

    def test_resolve_stops_at_first_strategy_with_value(self):
        bulletin = Bulletin(
            event_type="Hurricane Warning",
            headline="",
            description="Wind gusts up to 75 mph. Sustained 120 mph near the eyewall.",
        )
        value, source = resolve(WIND_STRATEGIES, bulletin)
        self.assertEqual(value, 75)
        self.assertEqual(source, "phrased")


if __name__ == '__main__':
    unittest.main()
