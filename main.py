"""
main.py — Graph Trace Engine Flask App
======================================
JSON API in front of the engine.  Rendering lives in the browser; the
server generates graphs, runs the algorithms and moves the playback
cursor.

Routes:
  GET  /api/algorithms         – registry listing
  GET  /api/graph              – current graph
  POST /api/graph/generate     – generate a new random graph (or preset)
  POST /api/graph/import       – import a JSON document or adjacency text
  POST /api/graph/layout       – re-run the force-directed layout
  POST /api/run                – record a full algorithm trace
  POST /api/step/next          – advance one step
  POST /api/step/prev          – rewind one step
  POST /api/step/goto          – jump to step N
  POST /api/step/play          – toggle play/pause
  POST /api/step/tick          – timer tick while playing
  POST /api/step/speed         – preset / slider / seconds
  GET  /api/state              – current app state (for polling)

State management:
  The Flask session only carries a workspace token.  Graph, recorded
  trace and player live in the app's WorkspaceStore (in memory).
"""

import random
import secrets
import sys
from typing import Optional, Union

from flask import Flask, current_app, jsonify, request, session
from loguru import logger

from config import DEFAULTS
from graph import (
    Graph,
    GraphFormatError,
    PRESETS,
    generate_preset,
    generate_random_graph,
    layout_force_directed,
)
from algorithms import get_algorithm, list_algorithms
from engine import Recorder, Workspace, WorkspaceStore


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(overrides: Optional[dict] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(DEFAULTS)
    app.config.from_prefixed_env("GRAPHTRACE")
    if overrides:
        app.config.update(overrides)
    if not app.config.get("SECRET_KEY"):
        app.config["SECRET_KEY"] = secrets.token_hex(32)

    app.extensions["workspaces"] = WorkspaceStore(app.config["TRACE_STORE_SIZE"])

    _register_routes(app)
    return app


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def _store() -> WorkspaceStore:
    return current_app.extensions["workspaces"]


def get_workspace() -> Workspace:
    """Workspace of this session, created with a default graph on first use."""
    ws = _store().get(session.get("workspace"))
    if ws is None:
        token, ws = _store().create()
        session["workspace"] = token
        ws.set_graph(_layout(generate_preset("directed-cycle", rng=random.Random(42))))
    return ws


def _layout(graph: Graph, iterations: Optional[int] = None) -> Graph:
    cfg = current_app.config
    return layout_force_directed(
        graph,
        iterations=cfg["LAYOUT_ITERATIONS"] if iterations is None else iterations,
        bounds=(cfg["CANVAS_WIDTH"], cfg["CANVAS_HEIGHT"]),
        margin=cfg["CANVAS_MARGIN"],
    )


def _error(message: str, status: int = 400):
    return jsonify({"error": message}), status


def _step_payload(ws: Workspace) -> dict:
    player = ws.player
    step = player.current_step
    return {
        "step":         step.to_dict() if step else None,
        "current_step": player.current_idx,
        "total_steps":  player.total_steps,
        "state":        player.state.value,
    }


# ---------------------------------------------------------------------------
# Request body fields
# ---------------------------------------------------------------------------
def _json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object")
    return data


def _int_field(data: dict, key: str, default: Optional[int] = None) -> Optional[int]:
    if key not in data:
        return default
    value = data[key]
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f'"{key}" must be an integer')
    return value


def _number_field(data: dict, key: str, default: Optional[float] = None) -> Optional[float]:
    if key not in data:
        return default
    value = data[key]
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise ValueError(f'"{key}" must be a number')
    return float(value)


def _bool_field(data: dict, key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f'"{key}" must be true or false')
    return value


def _str_field(data: dict, key: str, default: Optional[str] = None) -> Optional[str]:
    value = data.get(key, default)
    if value is not None and not isinstance(value, str):
        raise ValueError(f'"{key}" must be a string')
    return value


def _seed_field(data: dict) -> Optional[Union[int, str]]:
    """Integer or string seed; null or absent means unseeded."""
    seed = data.get("seed")
    if seed is None or isinstance(seed, str):
        return seed
    return _int_field(data, "seed")


def _iterations_field(data: dict) -> Optional[int]:
    iterations = _int_field(data, "iterations")
    if iterations is not None and iterations < 0:
        raise ValueError('"iterations" must not be negative')
    return iterations


def _no_run(ws: Workspace):
    """Error response when there is nothing to play, else None."""
    if ws.player is None or ws.player.total_steps == 0:
        return _error("No algorithm run yet", 404)
    return None


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
def _register_routes(app: Flask) -> None:

    @app.errorhandler(GraphFormatError)
    def handle_format_error(exc):
        logger.warning(f"Rejected graph import: {exc}")
        return _error(str(exc))

    @app.errorhandler(ValueError)
    def handle_value_error(exc):
        logger.warning(f"Bad request: {exc}")
        return _error(str(exc))

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------
    @app.route("/api/algorithms")
    def api_algorithms():
        return jsonify({
            "algorithms": [a.to_dict() for a in list_algorithms()],
            "presets":    sorted(PRESETS),
        })

    # ------------------------------------------------------------------
    # Graph
    # ------------------------------------------------------------------
    @app.route("/api/graph")
    def api_graph():
        ws = get_workspace()
        return jsonify({"graph": ws.graph.to_dict()})

    @app.route("/api/graph/generate", methods=["POST"])
    def api_graph_generate():
        data = _json_body()
        cfg  = current_app.config
        seed = _seed_field(data)
        rng  = random.Random(seed)

        preset = _str_field(data, "preset")
        if preset:
            g = generate_preset(
                preset, radius=cfg["CIRCLE_RADIUS"], center=tuple(cfg["CIRCLE_CENTER"]), rng=rng,
            )
        else:
            count = _int_field(data, "vertices", cfg["DEFAULT_VERTEX_COUNT"])
            if count > cfg["MAX_VERTEX_COUNT"]:
                return _error(f"At most {cfg['MAX_VERTEX_COUNT']} vertices are supported")
            g = generate_random_graph(
                vertex_count=count,
                edge_probability=_number_field(data, "prob", cfg["DEFAULT_EDGE_PROBABILITY"]),
                directed=_bool_field(data, "directed", True),
                allow_cycles=_bool_field(data, "allow_cycles", True),
                radius=cfg["CIRCLE_RADIUS"],
                center=tuple(cfg["CIRCLE_CENTER"]),
                rng=rng,
            )

        if _bool_field(data, "layout", True):
            g = _layout(g, _iterations_field(data))

        ws = get_workspace()
        ws.set_graph(g)
        logger.info(f"Generated {g!r} (seed={seed}, preset={preset})")
        return jsonify({"graph": g.to_dict()})

    @app.route("/api/graph/import", methods=["POST"])
    def api_graph_import():
        data = _json_body()
        cfg  = current_app.config

        if "graph" in data:
            g = Graph.from_dict(data["graph"], max_vertices=cfg["MAX_IMPORT_VERTICES"])
        elif "text" in data:
            g = Graph.from_adjacency_text(
                _str_field(data, "text") or "",
                directed=_bool_field(data, "directed", True),
                radius=cfg["CIRCLE_RADIUS"],
                center=tuple(cfg["CIRCLE_CENTER"]),
            )
            if g.vertex_count() > cfg["MAX_IMPORT_VERTICES"]:
                raise GraphFormatError(f"Graph can have at most {cfg['MAX_IMPORT_VERTICES']} vertices")
        else:
            return _error('Expected "graph" or "text"')

        if _bool_field(data, "layout", False):
            g = _layout(g)

        ws = get_workspace()
        ws.set_graph(g)
        logger.info(f"Imported {g!r}")
        return jsonify({"graph": g.to_dict()})

    @app.route("/api/graph/layout", methods=["POST"])
    def api_graph_layout():
        data = _json_body()
        ws = get_workspace()
        ws.set_graph(_layout(ws.graph, _iterations_field(data)))
        return jsonify({"graph": ws.graph.to_dict()})

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        data = _json_body()
        ws = get_workspace()

        algo_key = _str_field(data, "algorithm") or ("cycle_directed" if ws.graph.directed else "cycle_undirected")
        if get_algorithm(algo_key) is None:
            return _error(f"Unknown algorithm: {algo_key}")

        rec = Recorder()
        metrics = rec.run(algo_key, ws.graph)
        player = ws.load_run(rec)
        player.set_speed(current_app.config["DEFAULT_SPEED"])

        logger.info(f"Ran {algo_key} on {ws.graph!r}: found={metrics.found}, {metrics.total_steps} steps")
        payload = _step_payload(ws)
        payload.update({
            "algorithm":     algo_key,
            "found":         rec.result.found,
            "path_or_cycle": list(rec.result.path_or_cycle) if rec.result.path_or_cycle else None,
            "metrics":       rec.export()["metrics"],
        })
        return jsonify(payload)

    # ------------------------------------------------------------------
    # Step navigation
    # ------------------------------------------------------------------
    @app.route("/api/step/next", methods=["POST"])
    def api_step_next():
        ws = get_workspace()
        err = _no_run(ws)
        if err:
            return err
        if not ws.player.next_step():
            return _error("Already at last step")
        return jsonify(_step_payload(ws))

    @app.route("/api/step/prev", methods=["POST"])
    def api_step_prev():
        ws = get_workspace()
        err = _no_run(ws)
        if err:
            return err
        if not ws.player.prev_step():
            return _error("Already at first step")
        return jsonify(_step_payload(ws))

    @app.route("/api/step/goto", methods=["POST"])
    def api_step_goto():
        ws = get_workspace()
        err = _no_run(ws)
        if err:
            return err
        idx = _int_field(_json_body(), "index", 0)
        if not ws.player.goto_step(idx):
            return _error("Invalid step index")
        return jsonify(_step_payload(ws))

    @app.route("/api/step/play", methods=["POST"])
    def api_step_play():
        ws = get_workspace()
        err = _no_run(ws)
        if err:
            return err
        ws.player.toggle_play()
        return jsonify({"is_playing": ws.player.is_playing, "state": ws.player.state.value})

    @app.route("/api/step/tick", methods=["POST"])
    def api_step_tick():
        ws = get_workspace()
        err = _no_run(ws)
        if err:
            return err
        advanced = ws.player.tick()
        payload = _step_payload(ws)
        payload["advanced"] = advanced
        return jsonify(payload)

    @app.route("/api/step/speed", methods=["POST"])
    def api_step_speed():
        ws = get_workspace()
        err = _no_run(ws)
        if err:
            return err
        data = _json_body()
        if "preset" in data:
            ws.player.set_speed(_str_field(data, "preset"))
        elif "slider" in data:
            ws.player.set_speed_slider(_number_field(data, "slider"))
        elif "seconds" in data:
            ws.player.set_speed_value(_number_field(data, "seconds"))
        else:
            return _error('Expected "preset", "slider" or "seconds"')
        return jsonify({"speed": ws.player.speed})

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @app.route("/api/state")
    def api_state():
        ws = get_workspace()
        state = {
            "vertices":     ws.graph.vertex_count(),
            "edges":        ws.graph.edge_count(),
            "directed":     ws.graph.directed,
            "algorithm":    None,
            "current_step": 0,
            "total_steps":  0,
            "is_playing":   False,
            "speed":        None,
        }
        if ws.player is not None and ws.recorder is not None:
            state.update({
                "algorithm":    ws.recorder.metrics.algo_key,
                "current_step": ws.player.current_idx,
                "total_steps":  ws.player.total_steps,
                "is_playing":   ws.player.is_playing,
                "speed":        ws.player.speed,
            })
        return jsonify(state)


app = create_app()


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logger.remove()
    logger.add(sys.stderr, level=app.config["LOG_LEVEL"])
    logger.info("Graph Trace Engine — open http://localhost:5000/api/algorithms")
    app.run(debug=True, host="0.0.0.0", port=5000)
