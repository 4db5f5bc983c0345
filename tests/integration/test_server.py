"""
tests/integration/test_server.py
==================================
Integration tests for the FastAPI solver server.
Tests the REST API contract: /validate, /next-step, /solve,
/apply-step, /rules and /health.

Requires: pip install httpx (for the test client)
"""

import pytest

try:
    from fastapi.testclient import TestClient
    from sunmoon.deployment.server.app import app

    HAS_FASTAPI = True
except ImportError:
    HAS_FASTAPI = False

pytestmark = pytest.mark.skipif(not HAS_FASTAPI, reason="fastapi not installed")

SYMBOLS = {"S": "sun", "M": "moon", ".": None}


def wire(*rows, size=6):
    rows = list(rows) + ["." * size] * (size - len(rows))
    return [[SYMBOLS[ch] for ch in row] for row in rows]


SAMPLE = {
    "grid": wire("SS..M.", "..S..S", "S..S.M", ".S..S.", ".M..S.", "M.S..S"),
    "constraints": {"equals": [[1, 0, 1, 1], [5, 3, 5, 4]], "notEquals": [[4, 2, 4, 3]]},
}

SOLUTION = wire("SSMSMM", "MMSMSS", "SMSSMM", "MSMMSS", "SMMSSM", "MSSMMS")


@pytest.fixture
def client():
    return TestClient(app)


class TestHealthEndpoint:
    def test_health_returns_ok(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert "version" in body

    def test_health_includes_framework(self, client):
        assert client.get("/health").json()["framework"] == "sunmoon-core"


class TestRulesEndpoint:
    def test_lists_rules_in_priority_order(self, client):
        body = client.get("/api/v1/rules").json()
        assert body["total"] == 10
        assert body["rules"][0] == "No-Three Rule"
        assert body["rules"][-1] == "Adjacent-Equals-Constraint Rule"


class TestValidateEndpoint:
    def test_valid_start(self, client):
        resp = client.post("/api/v1/validate", json=SAMPLE)
        assert resp.status_code == 200
        assert resp.json() == {"valid": True, "violations": []}

    def test_illegal_start_lists_violations(self, client):
        resp = client.post(
            "/api/v1/validate",
            json={"grid": wire("SS...."), "constraints": {"notEquals": [[0, 0, 0, 1]]}},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["valid"] is False
        assert "(1,1) and (1,2)" in body["violations"][0]

    def test_malformed_grid_is_400(self, client):
        resp = client.post("/api/v1/validate", json={"grid": wire("S....", size=5)})
        assert resp.status_code == 400
        assert resp.json()["detail"]["errors"] == ["Size 5 must be even"]


class TestNextStepEndpoint:
    def test_returns_step_in_wire_form(self, client):
        resp = client.post("/api/v1/next-step", json={"grid": wire("SS....")})
        assert resp.status_code == 200
        body = resp.json()
        assert body["found"] is True
        step = body["step"]
        assert step["ruleName"] == "No-Three Rule"
        assert step["resultCell"] == [0, 2]
        assert step["resultValue"] == "moon"
        assert step["gridStateAfter"][0][2] == "moon"
        assert step["gridStateBefore"][0][2] is None

    def test_empty_grid_is_refused_by_gate(self, client):
        resp = client.post("/api/v1/next-step", json={"grid": wire()})
        assert resp.status_code == 422
        assert resp.json()["detail"]["violations"] == ["Grid cannot be completely empty"]

    def test_no_forced_move(self, client):
        resp = client.post("/api/v1/next-step", json={"grid": wire("S.....")})
        body = resp.json()
        assert body["found"] is False
        assert body["step"] is None
        assert body["message"]


class TestSolveEndpoint:
    def test_solves_sample(self, client):
        resp = client.post("/api/v1/solve", json=SAMPLE)
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "solved"
        assert body["solved"] is True
        assert len(body["steps"]) == 21
        assert body["final_grid"] == SOLUTION

    def test_illegal_start_is_422(self, client):
        resp = client.post(
            "/api/v1/solve",
            json={"grid": wire("SSS..."), "constraints": {}},
        )
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert detail["violations"] == ["Row 1 has 3+ consecutive suns starting at column 1"]

    def test_stuck_is_reported_not_raised(self, client):
        resp = client.post("/api/v1/solve", json={"grid": wire("S.....")})
        body = resp.json()
        assert resp.status_code == 200
        assert body["status"] == "stuck"
        assert body["steps"] == []
        assert body["message"]


class TestApplyStepEndpoint:
    def test_apply_step_from_next_step(self, client):
        grid = wire("SS....")
        step = client.post("/api/v1/next-step", json={"grid": grid}).json()["step"]
        resp = client.post("/api/v1/apply-step", json={"grid": grid, "step": step})
        assert resp.status_code == 200
        body = resp.json()
        assert body["grid"] == step["gridStateAfter"]
        assert body["complete"] is False

    def test_malformed_step_is_400(self, client):
        resp = client.post("/api/v1/apply-step", json={"grid": wire("SS...."), "step": {"ruleName": "x"}})
        assert resp.status_code == 400

    def test_step_without_a_value_is_400(self, client):
        grid = wire("SS....")
        step = client.post("/api/v1/next-step", json={"grid": grid}).json()["step"]
        step.update(resultCell=[0, 0], resultValue=None)
        resp = client.post("/api/v1/apply-step", json={"grid": grid, "step": step})
        assert resp.status_code == 400
        assert "sun or moon" in resp.json()["detail"]["message"]


class TestTimingHeader:
    def test_responses_carry_solve_time(self, client):
        resp = client.post("/api/v1/solve", json=SAMPLE)
        assert resp.status_code == 200
        assert float(resp.headers["X-Solve-Time-Ms"]) >= 0

    def test_health_is_timed_too(self, client):
        assert "X-Solve-Time-Ms" in client.get("/health").headers
