"""Tests for the Flask JSON API."""

import pytest

from main import create_app


@pytest.fixture
def app():
    return create_app({"TESTING": True, "SECRET_KEY": "test", "LAYOUT_ITERATIONS": 5})


@pytest.fixture
def client(app):
    return app.test_client()


def _import_text(client, text, directed=True):
    return client.post("/api/graph/import", json={"text": text, "directed": directed})


class TestGraphRoutes:
    """Generation, import and layout."""

    def test_algorithms_listing(self, client):
        data = client.get("/api/algorithms").get_json()
        keys = [a["key"] for a in data["algorithms"]]
        assert keys == ["cycle_directed", "cycle_undirected", "eulerian_path"]
        assert data["presets"] == ["directed-cycle", "eulerian-path", "undirected-cycle"]

    def test_default_graph(self, client):
        graph = client.get("/api/graph").get_json()["graph"]
        assert graph["directed"] is True
        assert len(graph["vertices"]) == 7

    def test_generate_with_seed_is_reproducible(self, client):
        body = {"vertices": 6, "prob": 0.4, "seed": 3, "layout": False}
        first = client.post("/api/graph/generate", json=body).get_json()
        second = client.post("/api/graph/generate", json=body).get_json()
        assert first == second
        assert len(first["graph"]["vertices"]) == 6

    def test_generate_preset(self, client):
        resp = client.post("/api/graph/generate", json={"preset": "undirected-cycle", "seed": 1})
        assert resp.status_code == 200
        assert resp.get_json()["graph"]["directed"] is False

    def test_generate_unknown_preset(self, client):
        resp = client.post("/api/graph/generate", json={"preset": "nope"})
        assert resp.status_code == 400
        assert "Unknown preset" in resp.get_json()["error"]

    def test_generate_too_many_vertices(self, client):
        resp = client.post("/api/graph/generate", json={"vertices": 100})
        assert resp.status_code == 400

    def test_import_document(self, client):
        doc = {
            "directed": True,
            "vertices": [{"id": 0, "x": 100, "y": 100}, {"id": 1, "x": 200, "y": 100}],
            "edges": [{"from": 0, "to": 1}],
        }
        resp = client.post("/api/graph/import", json={"graph": doc})
        assert resp.status_code == 200
        assert client.get("/api/graph").get_json()["graph"]["edges"][0]["to"] == 1

    def test_import_invalid_document(self, client):
        resp = client.post("/api/graph/import", json={"graph": {"vertices": [], "edges": []}})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Graph must have at least one vertex"

    def test_import_text(self, client):
        resp = _import_text(client, "A: B\nB: C\nC: A")
        assert resp.status_code == 200
        assert len(resp.get_json()["graph"]["edges"]) == 3

    def test_import_requires_payload(self, client):
        resp = client.post("/api/graph/import", json={})
        assert resp.status_code == 400

    def test_layout_keeps_edges(self, client):
        _import_text(client, "A: B\nB: C")
        resp = client.post("/api/graph/layout", json={"iterations": 3})
        graph = resp.get_json()["graph"]
        assert len(graph["edges"]) == 2
        for v in graph["vertices"]:
            assert 50 <= v["x"] <= 550


class TestRunAndPlayback:
    """Running an algorithm and moving the cursor."""

    def test_step_routes_need_a_run(self, client):
        assert client.post("/api/step/next").status_code == 404

    def test_run_directed_cycle(self, client):
        _import_text(client, "A: B\nB: C\nC: A")
        data = client.post("/api/run", json={"algorithm": "cycle_directed"}).get_json()
        assert data["found"] is True
        assert data["path_or_cycle"] == [0, 1, 2]
        assert data["current_step"] == 0
        assert data["total_steps"] == 8
        assert data["metrics"]["total_steps"] == 8
        assert data["state"] == "paused"

    def test_run_defaults_by_directedness(self, client):
        _import_text(client, "A: B C\nB: C", directed=False)
        data = client.post("/api/run", json={}).get_json()
        assert data["algorithm"] == "cycle_undirected"
        assert data["found"] is True

    def test_run_unknown_algorithm(self, client):
        resp = client.post("/api/run", json={"algorithm": "bfs"})
        assert resp.status_code == 400

    def test_step_navigation(self, client):
        _import_text(client, "A: B\nB: C\nC: A")
        client.post("/api/run", json={"algorithm": "eulerian_path"})

        assert client.post("/api/step/prev").status_code == 400
        data = client.post("/api/step/next").get_json()
        assert data["current_step"] == 1
        assert data["step"]["step_number"] == 1

        data = client.post("/api/step/goto", json={"index": data["total_steps"] - 1}).get_json()
        assert data["step"]["is_final"] is True
        assert client.post("/api/step/next").status_code == 400
        assert client.post("/api/step/goto", json={"index": 999}).status_code == 400

    def test_play_speed_and_state(self, client):
        _import_text(client, "A: B\nB: A")
        client.post("/api/run", json={"algorithm": "cycle_directed"})

        assert client.post("/api/step/speed", json={"preset": "fast"}).get_json()["speed"] == 0.3
        assert client.post("/api/step/speed", json={"slider": 100}).get_json()["speed"] == pytest.approx(0.1)
        assert client.post("/api/step/speed", json={"preset": "warp"}).status_code == 400

        play = client.post("/api/step/play").get_json()
        assert play["is_playing"] is True
        state = client.get("/api/state").get_json()
        assert state["algorithm"] == "cycle_directed"
        assert state["is_playing"] is True

        tick = client.post("/api/step/tick").get_json()
        assert "advanced" in tick

    def test_new_graph_discards_run(self, client):
        _import_text(client, "A: B\nB: A")
        client.post("/api/run", json={"algorithm": "cycle_directed"})
        _import_text(client, "A: B")
        assert client.get("/api/state").get_json()["total_steps"] == 0
        assert client.post("/api/step/next").status_code == 404

    def test_sessions_are_isolated(self, app):
        first, second = app.test_client(), app.test_client()
        _import_text(first, "A: B\nB: A")
        first.post("/api/run", json={"algorithm": "cycle_directed"})
        assert second.get("/api/state").get_json()["total_steps"] == 0


class TestRequestValidation:
    """Badly typed JSON fields come back as 400 with a message."""

    @pytest.mark.parametrize("body", [
        {"vertices": None},
        {"vertices": "5"},
        {"vertices": 5.5},
        {"vertices": 5, "iterations": "5"},
        {"vertices": 5, "iterations": -1},
        {"vertices": 5, "seed": [1, 2]},
        {"vertices": 5, "seed": {"a": 1}},
        {"vertices": 5, "prob": "high"},
        {"vertices": 5, "directed": "false"},
        {"vertices": 5, "allow_cycles": 0},
        {"vertices": 5, "layout": "no"},
        {"preset": ["directed-cycle"]},
        {"vertices": 0},
    ])
    def test_generate_rejects_bad_fields(self, client, body):
        resp = client.post("/api/graph/generate", json=body)
        assert resp.status_code == 400
        assert "error" in resp.get_json()

    def test_string_seed_accepted(self, client):
        body = {"vertices": 5, "seed": "demo", "layout": False}
        first = client.post("/api/graph/generate", json=body).get_json()
        second = client.post("/api/graph/generate", json=body).get_json()
        assert first == second

    def test_directed_false_is_a_real_boolean(self, client):
        resp = client.post("/api/graph/generate", json={"vertices": 4, "directed": False, "seed": 1})
        assert resp.get_json()["graph"]["directed"] is False

    def test_body_must_be_an_object(self, client):
        resp = client.post("/api/graph/generate", json=[1, 2, 3])
        assert resp.status_code == 400

    @pytest.mark.parametrize("body", [
        {"text": 42},
        {"text": "A: B", "directed": "false"},
        {"graph": {"directed": "false", "vertices": [{"id": 0}], "edges": []}},
        {"graph": {"vertices": [{"id": 0}, {"id": 1}], "edges": [{"from": 0, "to": 1.9}]}},
        {"graph": {"vertices": [{"id": 0}, {"id": 1}], "edges": [{"from": 0, "to": True}]}},
    ])
    def test_import_rejects_bad_fields(self, client, body):
        resp = client.post("/api/graph/import", json=body)
        assert resp.status_code == 400

    def test_layout_rejects_string_iterations(self, client):
        resp = client.post("/api/graph/layout", json={"iterations": "5"})
        assert resp.status_code == 400

    def test_run_rejects_non_string_algorithm(self, client):
        resp = client.post("/api/run", json={"algorithm": ["cycle_directed"]})
        assert resp.status_code == 400

    def test_step_fields_are_checked(self, client):
        _import_text(client, "A: B\nB: A")
        client.post("/api/run", json={"algorithm": "cycle_directed"})

        assert client.post("/api/step/goto", json={"index": "2"}).status_code == 400
        assert client.post("/api/step/goto", json={"index": True}).status_code == 400
        assert client.post("/api/step/speed", json={"slider": None}).status_code == 400
        assert client.post("/api/step/speed", json={"seconds": "fast"}).status_code == 400
        assert client.post("/api/step/speed", json={"preset": ["fast"]}).status_code == 400
