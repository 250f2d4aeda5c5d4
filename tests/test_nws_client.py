import unittest
from unittest.mock import MagicMock, patch
import os
import sys

from urllib3.exceptions import MaxRetryError

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from storm_alerts.clients import nws_client
from storm_alerts.clients.nws_client import NWSRetry, build_retry, get_nws_session


def upstream(status, retry_after=None):
    resp = MagicMock()
    resp.status = status
    resp.headers = {"Retry-After": retry_after} if retry_after is not None else {}
    resp.get_redirect_location.return_value = False
    return resp


class TestRetryAfter(unittest.TestCase):

    def setUp(self):
        self.retry = build_retry(3)

    def test_numeric_header_is_honoured(self):
        self.assertEqual(self.retry.get_retry_after(upstream(429, "5")), 5.0)

    def test_missing_header_on_rate_limit_uses_default_wait(self):
        self.assertEqual(self.retry.get_retry_after(upstream(429)), 60)

    def test_unusable_header_on_rate_limit_uses_default_wait(self):
        for value in ("-1", "soon", "inf", "nan"):
            with self.subTest(value=value):
                self.assertEqual(self.retry.get_retry_after(upstream(429, value)), 60)

    def test_server_error_without_header_falls_back_to_backoff(self):
        self.assertIsNone(self.retry.get_retry_after(upstream(503)))

    @patch("urllib3.util.retry.time.sleep")
    def test_negative_header_never_reaches_sleep(self, mock_sleep):
        self.retry.sleep(upstream(429, "-1"))
        mock_sleep.assert_called_once_with(60)

    @patch("urllib3.util.retry.time.sleep")
    def test_rate_limit_sleeps_for_retry_after(self, mock_sleep):
        self.retry.sleep(upstream(429, "7"))
        mock_sleep.assert_called_once_with(7.0)


class TestBackoff(unittest.TestCase):

    def test_backoff_grows_linearly_with_attempts(self):
        retry = build_retry(3)
        waits = []
        for _ in range(3):
            retry = retry.increment(method="GET", url="/alerts", response=upstream(503))
            waits.append(retry.get_backoff_time())
        self.assertEqual(waits, [2.0, 4.0, 6.0])

    def test_budget_is_exhausted_after_max_retries(self):
        retry = build_retry(3)
        for _ in range(3):
            retry = retry.increment(method="GET", url="/alerts", response=upstream(503))
        with self.assertRaises(MaxRetryError):
            retry.increment(method="GET", url="/alerts", response=upstream(503))

    @patch("urllib3.util.retry.time.sleep")
    def test_server_error_sleeps_for_backoff(self, mock_sleep):
        retry = build_retry(3).increment(method="GET", url="/alerts", response=upstream(502))
        retry.sleep(upstream(502))
        mock_sleep.assert_called_once_with(2.0)


class TestNWSSession(unittest.TestCase):

    @patch.object(nws_client, "_session", None)
    def test_session_mounts_retrying_adapter(self):
        session = get_nws_session()

        self.assertEqual(session.headers["Accept"], "application/geo+json")
        retries = session.get_adapter("https://api.weather.gov/alerts").max_retries
        self.assertIsInstance(retries, NWSRetry)
        self.assertEqual(retries.total, 3)
        self.assertTrue(retries.respect_retry_after_header)
        for status in (429, 500, 503, 504):
            self.assertIn(status, retries.status_forcelist)


if __name__ == '__main__':
    unittest.main()
