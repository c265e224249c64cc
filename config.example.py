# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
See src/taskboard/config.py for parsing rules and defaults.
"""

ENV_VARS = {
    # App / logging
    "TASKBOARD_APP_NAME": "App display name (default: taskboard).",
    "TASKBOARD_LOG_LEVEL": "Console logging level (default: INFO).",
    "TASKBOARD_DATA_DIR": "Local directory for taskboard.log (default: .local/taskboard).",
    # Task source
    "TASKBOARD_TASK_SOURCE": "Where tasks are fetched from: demo | http (default: demo).",
    "TASKBOARD_TASKS_URL": "URL returning a JSON task list (required for the http source).",
    "TASKBOARD_FETCH_TIMEOUT_SECONDS": "HTTP request timeout in seconds (default: 10).",
    "TASKBOARD_DEMO_DELAY_SECONDS": "Artificial delay of the demo source (default: 1.0).",
    # Startup / connectors
    "TASKBOARD_FETCH_ON_START": "Request a fetch as soon as the console starts (default: true).",
    "TASKBOARD_CONSOLE_ENABLED": "Run the console REPL; otherwise fetch once and exit (default: true).",
}
