import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
import os
import sys

import requests
from requests.exceptions import RetryError

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from storm_alerts.models import ExtractedHazard, RawAlert
from storm_alerts.services.fetcher import AlertFetcher, is_roof_damage_relevant, was_active_within
from storm_alerts.services.zones import RegionZones, ZoneDirectory


NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def iso(dt):
    return dt.isoformat().replace("+00:00", "Z")


def feature(event="Severe Thunderstorm Warning", area="Travis, TX",
            description="HAZARD...60 mph wind gusts.", onset=NOW, expires=None):
    props = {
        "event": event,
        "headline": f"{event} issued",
        "description": description,
        "areaDesc": area,
    }
    if onset is not None:
        props["onset"] = iso(onset)
    if expires is not None:
        props["expires"] = iso(expires)
    return {"properties": props}


def response(status=200, features=None, headers=None, next_url=None):
    resp = MagicMock()
    resp.status_code = status
    resp.headers = headers or {}
    resp.text = "error body"
    payload = {"features": features or []}
    if next_url:
        payload["pagination"] = {"next": next_url}
    resp.json.return_value = payload
    return resp


class TestAlertFetcher(unittest.TestCase):

    def setUp(self):
        self.session = MagicMock()
        self.sleep = MagicMock()
        directory = ZoneDirectory({"Texas": RegionZones("TX", ("TXZ001", "TXZ002"))})
        self.fetcher = AlertFetcher(
            self.session,
            directory,
            base_url="https://api.weather.gov",
            sleep=self.sleep,
            clock=lambda: NOW,
        )

    def test_active_polls_each_zone_with_delay(self):
        self.session.get.side_effect = [
            response(features=[feature(area="Travis, TX")]),
            response(features=[feature(area="Hays, TX")]),
        ]

        alerts = self.fetcher.fetch_active("Texas")

        self.assertEqual([a.area_description for a in alerts], ["Travis, TX", "Hays, TX"])
        urls = [c.args[0] for c in self.session.get.call_args_list]
        self.assertEqual(urls, [
            "https://api.weather.gov/alerts/active/zone/TXZ001",
            "https://api.weather.gov/alerts/active/zone/TXZ002",
        ])
        self.assertEqual(self.sleep.call_count, 2)

    def test_unknown_region_makes_no_requests(self):
        self.assertEqual(self.fetcher.fetch_active("Atlantis"), [])
        self.session.get.assert_not_called()

    def test_exhausted_retries_skip_zone_and_continue(self):
        self.session.get.side_effect = [
            RetryError("too many 503 error responses"),
            response(features=[feature(area="Hays, TX")]),
        ]

        alerts = self.fetcher.fetch_active("Texas")

        self.assertEqual([a.area_description for a in alerts], ["Hays, TX"])
        self.assertEqual(self.session.get.call_count, 2)

    def test_timeout_skips_zone(self):
        self.session.get.side_effect = [
            requests.Timeout("slow"),
            response(features=[feature()]),
        ]
        self.assertEqual(len(self.fetcher.fetch_active("Texas")), 1)

    def test_client_error_skips_zone(self):
        self.session.get.side_effect = [response(status=404), response(features=[feature()])]
        self.assertEqual(len(self.fetcher.fetch_active("Texas")), 1)
        self.assertEqual(self.session.get.call_count, 2)

    def test_non_object_json_skips_zone(self):
        unexpected = response()
        unexpected.json.return_value = ["unexpected"]
        self.session.get.side_effect = [unexpected, response(features=[feature(area="Hays, TX")])]

        alerts = self.fetcher.fetch_active("Texas")

        self.assertEqual([a.area_description for a in alerts], ["Hays, TX"])

    def test_invalid_json_skips_zone(self):
        broken = response()
        broken.json.side_effect = ValueError("Expecting value")
        self.session.get.side_effect = [broken, response(features=[feature()])]
        self.assertEqual(len(self.fetcher.fetch_active("Texas")), 1)

    def test_failed_history_request_yields_no_alerts(self):
        self.session.get.side_effect = [requests.ConnectionError("reset")]
        self.assertEqual(self.fetcher.fetch_recent_historical("Texas", 2), [])

    def test_irrelevant_alerts_are_dropped(self):
        self.session.get.side_effect = [
            response(features=[
                feature(event="Flood Warning", description="River flooding expected."),
                feature(),
            ]),
            response(),
        ]
        alerts = self.fetcher.fetch_active("Texas")
        self.assertEqual([a.event_type for a in alerts], ["Severe Thunderstorm Warning"])

    def test_malformed_feature_is_skipped(self):
        self.session.get.side_effect = [
            response(features=[{"properties": {"headline": "no event"}}, feature()]),
            response(),
        ]
        self.assertEqual(len(self.fetcher.fetch_active("Texas")), 1)

    def test_historical_window_filter_and_pagination(self):
        inside = feature(area="Travis, TX", onset=NOW - timedelta(hours=1), expires=NOW + timedelta(hours=1))
        expired = feature(area="Hays, TX", onset=NOW - timedelta(hours=6), expires=NOW - timedelta(hours=4))
        open_ended = feature(area="Bexar, TX", onset=NOW - timedelta(hours=3))
        untimed = feature(area="Llano, TX", onset=None)
        self.session.get.side_effect = [
            response(features=[inside, expired], next_url="https://api.weather.gov/alerts?cursor=abc"),
            response(features=[open_ended, untimed]),
        ]

        alerts = self.fetcher.fetch_recent_historical("Texas", 2)

        self.assertEqual([a.area_description for a in alerts], ["Travis, TX", "Bexar, TX"])
        first, second = self.session.get.call_args_list
        self.assertEqual(first.args[0], "https://api.weather.gov/alerts")
        self.assertEqual(first.kwargs["params"], {"area": "TX", "limit": 500})
        self.assertEqual(second.args[0], "https://api.weather.gov/alerts?cursor=abc")
        self.assertIsNone(second.kwargs["params"])

    def test_comprehensive_dedupes_active_and_recent(self):
        same = feature(area="Travis, TX", onset=NOW - timedelta(minutes=30), expires=NOW + timedelta(hours=1))
        self.session.get.side_effect = [
            response(features=[same]),
            response(),
            response(features=[same]),
        ]

        alerts = self.fetcher.fetch_comprehensive("Texas")

        self.assertEqual(len(alerts), 1)


class TestFilters(unittest.TestCase):

    def test_threshold_hazard_is_relevant(self):
        alert = RawAlert(event_type="Special Weather Statement")
        self.assertTrue(is_roof_damage_relevant(alert, ExtractedHazard(hail_inches=1.0)))
        self.assertFalse(is_roof_damage_relevant(alert, ExtractedHazard()))

    def test_keyword_is_relevant(self):
        alert = RawAlert(event_type="Special Weather Statement", description="Strong winds likely.")
        self.assertTrue(is_roof_damage_relevant(alert, ExtractedHazard()))

    def test_active_window(self):
        start, end = NOW - timedelta(hours=2), NOW
        self.assertTrue(was_active_within(
            RawAlert(event_type="x", onset_time=NOW - timedelta(hours=3), expires_time=NOW - timedelta(hours=1)),
            start, end,
        ))
        self.assertFalse(was_active_within(RawAlert(event_type="x"), start, end))
        self.assertFalse(was_active_within(
            RawAlert(event_type="x", onset_time=NOW + timedelta(hours=1)), start, end,
        ))


if __name__ == '__main__':
    unittest.main()
