"""
config.py — Defaults
====================
Every tunable of the web app in one place.  `main.create_app()` loads
these into `app.config` and then lets `GRAPHTRACE_*` environment
variables override them, e.g.

    GRAPHTRACE_MAX_IMPORT_VERTICES=40 python main.py
"""

DEFAULTS = {
    # random generation
    "DEFAULT_VERTEX_COUNT":     7,
    "DEFAULT_EDGE_PROBABILITY": 0.3,
    "MAX_VERTEX_COUNT":         26,
    "CIRCLE_RADIUS":            180,
    "CIRCLE_CENTER":            (300, 200),

    # force layout
    "LAYOUT_ITERATIONS":        50,
    "CANVAS_WIDTH":             600,
    "CANVAS_HEIGHT":            400,
    "CANVAS_MARGIN":            50,

    # custom import
    "MAX_IMPORT_VERTICES":      26,

    # playback
    "DEFAULT_SPEED":            "medium",
    "TRACE_STORE_SIZE":         128,

    # logging
    "LOG_LEVEL":                "INFO",
}
