"""Gunicorn config for container deployment."""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8001')}"

# Uvicorn async workers; each worker syncs the sheet at startup and holds its
# own snapshot; POST /api/sync refreshes only the worker that serves it.
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "1"))

# Startup sync is bounded by FETCH_TIMEOUT_SECONDS, well under this
timeout = 60

graceful_timeout = 30

keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()

wsgi_app = "app.main:app"
