"""Gunicorn configuration for docs_proxy.

Usage (from ``services/docs_proxy``):
    gunicorn app.main:app -c gunicorn_conf.py

TLS is terminated here; the application itself only sees decrypted ASGI
traffic. A missing or unreadable certificate stops the master at boot.
Listener and logging values come from the same ``DocsProxySettings`` the
application reads.
"""

import os

from app.core.config import DocsProxySettings

settings = DocsProxySettings()

# ── Server Socket ─────────────────────────────
bind = settings.bind
certfile = settings.tls_certfile
keyfile = settings.tls_keyfile

# ── Worker Processes ──────────────────────────
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
# h11 leaves a literal "#" in the request target; httptools strips the
# fragment before the application can forward it.
worker_class = "uvicorn.workers.UvicornH11Worker"
worker_tmp_dir = "/dev/shm"

# ── Timeouts ──────────────────────────────────
timeout = int(os.getenv("GUNICORN_TIMEOUT", "120"))
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", "30"))
keepalive = 5

# ── Logging ───────────────────────────────────
accesslog = None
errorlog = "-"
loglevel = settings.log_level.lower()

proc_name = settings.service_name
preload_app = True
