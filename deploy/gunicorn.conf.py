"""Gunicorn configuration for the admin dashboard.

Usage:
    gunicorn main:app -c deploy/gunicorn.conf.py

The dashboard keeps one operator session in process memory (screen state,
pending notifications), so it must run as a single worker.
"""

import os

# ─── Server socket ──────────────────────────────────────────────

bind = os.getenv("BIND", "0.0.0.0:5001")
backlog = 256

# ─── Worker processes ───────────────────────────────────────────

workers = 1
worker_class = "uvicorn.workers.UvicornWorker"

# ─── Timeouts ───────────────────────────────────────────────────
#
# Backend calls time out after ADMIN_API_TIMEOUT (15s default); bulk
# imports are the slowest requests.

timeout = 60
graceful_timeout = 15
keepalive = 5

# ─── Logging ────────────────────────────────────────────────────

accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# ─── Process naming ─────────────────────────────────────────────

proc_name = "course-assistant-admin"


def on_starting(server):
    """Called just before the master process is initialized."""
    server.log.info("Starting course assistant admin — bind=%s, timeout=%ds", bind, timeout)
