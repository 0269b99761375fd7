# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "DAYSCHED_APP_NAME": "App display name (default: Astronaut Daily Schedule).",
    "DAYSCHED_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "DAYSCHED_LOG_DIR": "Directory for app.log (default: logs).",
    # Notifications
    "DAYSCHED_CONSOLE_NOTIFICATIONS": "Print [NOTIFICATION] lines for schedule events (true/false).",
    # Paths (gitignored)
    "DAYSCHED_DATA_DIR": "Local data directory (default: data).",
    "DAYSCHED_TASKS_PATH": "Task list JSON path (default: <data_dir>/tasks.json).",
}
