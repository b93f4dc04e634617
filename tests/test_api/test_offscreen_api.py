"""Tests for API endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from mapsight.config import Settings, settings
from mapsight.dependencies import get_evaluator, get_settings
from mapsight.main import app

client = TestClient(app)


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["checks"] == ["offscreen"]


def test_offscreen_circle():
    response = client.post("/api/offscreen", json={
        "circle_size": 4,
        "objects": [
            {"kind": "circle", "time": 1000, "x": 256, "y": 420},
            {"kind": "circle", "time": 1500, "x": 256, "y": 192},
        ],
    })
    assert response.status_code == 200
    data = response.json()
    assert data["object_count"] == 2
    assert data["problem_count"] == 1
    assert data["warning_count"] == 0
    finding = data["findings"][0]
    assert finding["object_index"] == 0
    assert finding["part"] == "head"
    assert finding["classification"] == "Offscreen"
    assert finding["severity"] == "problem"
    assert finding["timestamp_text"] == "00:01:000"
    assert finding["message"] == "00:01:000 - Circle is offscreen."


def test_offscreen_prevented_head():
    response = client.post("/api/offscreen", json={
        "circle_size": 4,
        "objects": [{"kind": "circle", "time": 0, "x": 256, "y": -40}],
    })
    data = response.json()
    assert [f["classification"] for f in data["findings"]] == ["Prevented"]
    assert data["warning_count"] == 1


def test_offscreen_clean_slider():
    response = client.post("/api/offscreen", json={
        "circle_size": 4,
        "objects": [{
            "kind": "slider",
            "time": 0,
            "x": 100,
            "y": 192,
            "slider": {"curve_kind": "L", "control_points": [[300, 192]], "curve_duration": 400},
        }],
    })
    assert response.status_code == 200
    assert response.json()["findings"] == []


def test_offscreen_slider_tail():
    response = client.post("/api/offscreen", json={
        "circle_size": 4,
        "objects": [{
            "kind": "slider",
            "time": 500,
            "x": 256,
            "y": 192,
            "slider": {"curve_kind": "L", "control_points": [[256, 400]], "curve_duration": 300},
        }],
    })
    data = response.json()
    assert [(f["part"], f["classification"]) for f in data["findings"]] == [("tail", "Offscreen")]
    assert data["findings"][0]["timestamp"] == 800
    assert data["findings"][0]["message"] == "00:00:800 - Slider tail is offscreen."


def test_unordered_objects_rejected():
    response = client.post("/api/offscreen", json={
        "objects": [
            {"kind": "circle", "time": 100},
            {"kind": "circle", "time": 0},
        ],
    })
    assert response.status_code == 422
    assert "ordered" in response.json()["detail"]


def test_slider_without_curve_rejected():
    response = client.post("/api/offscreen", json={"objects": [{"kind": "slider", "time": 0}]})
    assert response.status_code == 422


def test_invalid_circle_size():
    response = client.post("/api/offscreen", json={"circle_size": 20, "objects": []})
    assert response.status_code == 422


def test_overlong_curve_duration_rejected():
    response = client.post("/api/offscreen", json={
        "objects": [{
            "kind": "slider",
            "time": 0,
            "slider": {"curve_kind": "B", "control_points": [[300, 250]], "curve_duration": 1e9},
        }],
    })
    assert response.status_code == 422


def test_evaluator_built_from_settings():
    assert get_evaluator(get_settings()).config.max_dense_samples == settings.max_dense_samples
    custom = get_evaluator(Settings(max_dense_samples=123, margin_leniency=1.0))
    assert custom.config.max_dense_samples == 123
    assert custom.config.margin_leniency == 1.0


def test_settings_dependency_override():
    app.dependency_overrides[get_settings] = lambda: Settings(margin_leniency=0.0)
    try:
        response = client.post("/api/offscreen", json={
            "circle_size": 4,
            "objects": [{"kind": "circle", "time": 0, "x": 256, "y": 420}],
        })
    finally:
        app.dependency_overrides.clear()
    assert response.json()["problem_count"] == 1
