"""
Gunicorn configuration for the Vice scoring API.

Env vars that override defaults:
  PORT       — TCP port to bind (default: 8000)
  WORKERS    — number of worker processes (default: 2)
  LOG_LEVEL  — gunicorn log level, shared with the app's Settings (default: info)

Run with: gunicorn -c gunicorn.conf.py vice.main:app
"""
import os

# Bind to all interfaces on the port the platform injects via $PORT.
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Each request is a short CPU-bound computation; one worker per core is enough.
workers = int(os.environ.get("WORKERS", "2"))

# Each worker runs Uvicorn's ASGI event loop inside Gunicorn's process manager.
worker_class = "uvicorn.workers.UvicornWorker"

# Keep connections alive for 5 s between requests (batch clients reuse them).
keepalive = 5

# Kill a worker that hasn't responded in 30 s; no scoring call comes close.
timeout = 30

# Logging — stdout only, level follows the app's LOG_LEVEL.
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

# Graceful restart: wait up to 30 s for in-flight requests to finish.
graceful_timeout = 30
