import json
import unittest
from urllib.parse import parse_qs, urlparse

import requests

from county_risk.data_sources import risk_client
from county_risk.data_sources.risk_client import RiskClient, build_risk_url, parse_risk_report
from county_risk.domain import Coordinate
from county_risk.errors import MalformedResponse, NetworkError

ENDPOINT = "https://risk.example.test/"


class DummyResp:
    def __init__(self, payload=None, text=None, status_code=200):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class RecordingSession:
    def __init__(self, resp=None, exc=None):
        self.resp = resp
        self.exc = exc
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.resp


def _sf_payload(**overrides):
    payload = {
        "rawLevel": 0,
        "levelLabel": "Low",
        "countyName": "San Francisco",
        "stateName": "CA",
        "lastUpdated": "2022-08-21",
    }
    payload.update(overrides)
    return payload


class TestBuildRiskUrl(unittest.TestCase):
    def test_location_is_single_comma_joined_value(self):
        url = build_risk_url(ENDPOINT, Coordinate(37.77, -122.42))
        query = parse_qs(urlparse(url).query)
        self.assertEqual(query, {"location": ["37.77,-122.42"]})
        self.assertTrue(url.startswith(ENDPOINT + "?location="))

    def test_uses_plain_decimal_strings(self):
        url = build_risk_url(ENDPOINT, Coordinate(40.712776, -74.005974))
        self.assertEqual(parse_qs(urlparse(url).query)["location"], ["40.712776,-74.005974"])

    def test_appends_to_existing_query(self):
        url = build_risk_url("https://risk.example.test/?v=2", Coordinate(1.5, 2.5))
        self.assertEqual(parse_qs(urlparse(url).query), {"v": ["2"], "location": ["1.5,2.5"]})


class TestParseRiskReport(unittest.TestCase):
    def test_parses_camel_case_keys(self):
        report = parse_risk_report(json.dumps(_sf_payload()))
        self.assertEqual(report.raw_level, 0)
        self.assertEqual(report.county_name, "San Francisco")
        self.assertEqual(report.state_name, "CA")

    def test_tolerates_extra_keys(self):
        report = parse_risk_report(json.dumps(_sf_payload(population=873965)))
        self.assertEqual(report.level_label, "Low")

    def test_parses_upstream_cdc_keys(self):
        body = json.dumps({
            "CCL_community_burden_level_integer": "2",
            "CCL_community_burden_level": "High",
            "County": "Travis County",
            "State_name": "Texas",
            "CCL_report_date": "2022-08-18",
        })
        report = parse_risk_report(body)
        self.assertEqual(report.raw_level, 2)
        self.assertEqual(report.county_name, "Travis County")

    def test_missing_field_is_malformed(self):
        payload = _sf_payload()
        del payload["countyName"]
        with self.assertRaises(MalformedResponse):
            parse_risk_report(json.dumps(payload))

    def test_wrong_type_is_malformed(self):
        with self.assertRaises(MalformedResponse):
            parse_risk_report(json.dumps(_sf_payload(rawLevel="high")))
        with self.assertRaises(MalformedResponse):
            parse_risk_report(json.dumps(_sf_payload(countyName=42)))
        with self.assertRaises(MalformedResponse):
            parse_risk_report(json.dumps(_sf_payload(rawLevel=True)))
        with self.assertRaises(MalformedResponse):
            parse_risk_report(json.dumps(_sf_payload(rawLevel=False)))

    def test_invalid_json_is_malformed(self):
        with self.assertRaises(MalformedResponse):
            parse_risk_report("<html>502 Bad Gateway</html>")

    def test_non_object_json_is_malformed(self):
        with self.assertRaises(MalformedResponse):
            parse_risk_report("[1, 2, 3]")


class TestRiskClient(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self._orig_session = risk_client.session

    def tearDown(self):
        risk_client.session = self._orig_session

    async def test_fetch_risk_success(self):
        session = RecordingSession(DummyResp(_sf_payload()))
        client = RiskClient(ENDPOINT, http_session=session)

        report = await client.fetch_risk(Coordinate(37.77, -122.42))

        self.assertEqual(report.county_name, "San Francisco")
        self.assertEqual(len(session.calls), 1)
        url, kwargs = session.calls[0]
        self.assertIn("location=37.77%2C-122.42", url)
        self.assertEqual(kwargs, {"timeout": None})

    async def test_uses_module_session_by_default(self):
        session = RecordingSession(DummyResp(_sf_payload(rawLevel=1)))
        risk_client.session = session

        report = await RiskClient(ENDPOINT).fetch_risk(Coordinate(0.0, 0.0))
        self.assertEqual(report.raw_level, 1)
        self.assertEqual(len(session.calls), 1)

    async def test_connection_error_is_network_error(self):
        session = RecordingSession(exc=requests.ConnectionError("unreachable"))
        client = RiskClient(ENDPOINT, http_session=session)

        with self.assertRaises(NetworkError) as ctx:
            await client.fetch_risk(Coordinate(37.77, -122.42))
        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectionError)
        self.assertEqual(len(session.calls), 1)

    async def test_timeout_is_network_error_without_retry(self):
        session = RecordingSession(exc=requests.Timeout("read timed out"))
        client = RiskClient(ENDPOINT, http_session=session, timeout=5.0)

        with self.assertRaises(NetworkError):
            await client.fetch_risk(Coordinate(37.77, -122.42))
        self.assertEqual(len(session.calls), 1)
        self.assertEqual(session.calls[0][1], {"timeout": 5.0})

    async def test_http_error_status_is_network_error(self):
        session = RecordingSession(DummyResp(text="oops", status_code=503))
        client = RiskClient(ENDPOINT, http_session=session)

        with self.assertRaises(NetworkError):
            await client.fetch_risk(Coordinate(37.77, -122.42))

    async def test_missing_field_is_malformed(self):
        payload = _sf_payload()
        del payload["rawLevel"]
        client = RiskClient(ENDPOINT, http_session=RecordingSession(DummyResp(payload)))

        with self.assertRaises(MalformedResponse):
            await client.fetch_risk(Coordinate(37.77, -122.42))


if __name__ == "__main__":
    unittest.main()
