"""
Gunicorn configuration for production deployment.

Run with: gunicorn careerhub.main:app -c gunicorn.conf.py
"""
import multiprocessing
import os

# Server socket
bind = f"{os.getenv('HOST', '0.0.0.0')}:{os.getenv('PORT', '8000')}"
backlog = 2048

# Worker processes
# Each worker holds its own async engine and connection pool
workers = int(os.getenv("GUNICORN_WORKERS", min(multiprocessing.cpu_count() * 2 + 1, 4)))
worker_class = "uvicorn.workers.UvicornWorker"

# Worker lifecycle
max_requests = 1000
max_requests_jitter = 100

# Timeouts
timeout = 60  # Media uploads to S3 can take a while
keepalive = 5
graceful_timeout = 30

# Process naming
proc_name = "careerhub_api"

# Server mechanics
daemon = False
pidfile = None

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()


# Server hooks
def when_ready(server):
    server.log.info("CareerHub API ready, spawning %s workers", workers)


def worker_abort(worker):
    worker.log.info("Worker received SIGABRT signal")
