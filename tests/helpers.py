"""Shared test doubles and payload factories.

FakeSession stands in for requests.Session: routes map a URL to either a
FakeResponse or an exception instance to raise. Every call is recorded so
tests can assert on what was (or wasn't) requested.
"""

import json

import requests

from drova_stats.config_store import ConfigStore
from drova_stats.models import BASE_URL, CATALOG_URL, STATS_URL


class FakeResponse:
    def __init__(self, status_code=200, text="", json_data=None):
        self.status_code = status_code
        if json_data is not None:
            text = json.dumps(json_data)
        self.text = text

    def json(self):
        return json.loads(self.text)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    def __init__(self, routes):
        self.routes = dict(routes)
        self.calls = []

    def get(self, url, headers=None, params=None, timeout=None):
        self.calls.append({"url": url, "headers": headers or {}, "params": params, "timeout": timeout})
        result = self.routes.get(url)
        if result is None:
            raise requests.ConnectionError(f"no route for {url}")
        if isinstance(result, BaseException):
            raise result
        return result

    def urls(self):
        return [c["url"] for c in self.calls]


class DictStore(ConfigStore):
    """ConfigStore double keyed by (path, key)."""

    def __init__(self, values):
        self.values = dict(values)
        self.asked = []

    def get(self, path, key):
        self.asked.append((path, key))
        return self.values.get((path, key))


# ─── Payload factories ────────────────────────────────────────────

def make_catalog(*pairs):
    return [{"productId": pid, "title": title} for pid, title in pairs]


def make_stats(per_game=None, total=None, per_server=None):
    """Build a statistics document. per_game: {id: (sessions, msecs)}."""
    per_game = per_game or {}
    ms = {
        "totalStat": {"sessionCount": (total or (0, 0))[0], "totalMsecs": (total or (0, 0))[1]},
        "perServerStats": per_server or {},
        "perGameStats": {
            pid: {"sessionCount": n, "totalMsecs": msecs} for pid, (n, msecs) in per_game.items()
        },
    }
    return {"monthStat": ms}


def make_session(catalog=None, stats=None, probe=None):
    """Routes for the three service URLs; None values mean 'connection refused'."""
    routes = {}
    if probe is not None:
        routes[BASE_URL] = probe
    if catalog is not None:
        routes[CATALOG_URL] = catalog
    if stats is not None:
        routes[STATS_URL] = stats
    return FakeSession(routes)
