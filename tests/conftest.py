"""
Shared fixtures for report tests.

Nothing here touches the network: sessions and fetchers are fakes.
"""

from unittest.mock import Mock

import pytest
import requests

from plugin_report.sources.base import BaseFetcher


class FakeClock:
    """Clock returning a settable time in seconds."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFetcher(BaseFetcher):
    """Fetcher serving canned payloads by URL and recording calls."""

    def __init__(self, payloads: dict):
        self.payloads = payloads
        self.calls = []

    def fetch(self, url, decode_as="json"):
        self.calls.append((url, decode_as))
        payload = self.payloads[url]
        if isinstance(payload, Exception):
            raise payload
        return payload


def make_response(status_code=200, json_data=None, text=""):
    """Build a Mock standing in for requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Error"
        )
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session():
    """Mock requests.Session."""
    return Mock(spec=requests.Session)


DOCUMENTATION_URL = "http://docs.test/plugin-documentation-urls.json"
INSTALLS_URL = "http://stats.test/plugins.csv"


@pytest.fixture
def documentation():
    return {
        "a": {"url": ""},
        "b": {"url": "https://github.com/jenkinsci/b-plugin"},
    }


@pytest.fixture
def make_fetcher(documentation):
    """Factory for a FakeFetcher serving the documentation fixture and given installs."""

    def _make(installs_text, docs=None):
        return FakeFetcher(
            {
                DOCUMENTATION_URL: documentation if docs is None else docs,
                INSTALLS_URL: installs_text,
            }
        )

    return _make
