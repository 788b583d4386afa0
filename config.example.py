# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "DEADLINE_FLOW_APP_NAME": "App display name (default: deadline-flow).",
    "DEADLINE_FLOW_LOG_LEVEL": "Console logging level (default: INFO).",
    # Shared storage
    "DEADLINE_FLOW_DATA_DIR": "Local data directory (default: .local/deadline_flow).",
    "DEADLINE_FLOW_SHARED_DEFAULTS_PATH": (
        "Shared defaults SQLite path (default: <data_dir>/shared_defaults.sqlite3)."
    ),
    "DEADLINE_FLOW_SUITE_NAME": "App-group suite name (default: group.com.sun2.chessclock).",
    "DEADLINE_FLOW_TASKS_KEY": "Key the main app stores the task snapshot under (default: tasks).",
    # Timeline refresh policy
    "DEADLINE_FLOW_DEFAULT_HORIZON_SECONDS": "Refresh delay when nothing is due (default: 3600).",
    "DEADLINE_FLOW_MINIMUM_GAP_SECONDS": "Earliest allowed refresh after a build (default: 60).",
    # Rendering
    "DEADLINE_FLOW_WIDGET_FAMILY": "small | medium | large (default: medium).",
}
