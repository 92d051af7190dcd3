from __future__ import annotations

from tests.helpers.http import API


def test_health_reports_database(client):
    resp = client.get(f"{API}/health")

    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok", "db": "ok", "version": "testing"}
