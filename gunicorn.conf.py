"""Gunicorn configuration for production deployment."""
import multiprocessing
import os

# Server Socket
bind = os.getenv("BIND", "0.0.0.0:8080")
backlog = 2048

# Worker Processes
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 1000
max_requests = 1000
max_requests_jitter = 50
timeout = 120
keepalive = 5

# Logging
accesslog = "-"  # Log to stdout
errorlog = "-"   # Log to stderr
loglevel = os.getenv("LOG_LEVEL", "info").lower()
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process Naming
proc_name = "leavedash"

# Server Mechanics
daemon = False
pidfile = None
user = None
group = None
tmp_upload_dir = None

preload_app = False

# Graceful timeout
graceful_timeout = 30


def when_ready(server):
    """Called just after the server is started."""
    server.log.info("Leave dashboard ready. Listening on: %s", bind)


def post_fork(server, worker):
    """Called just after a worker has been forked."""
    server.log.info("Worker spawned (pid: %s)", worker.pid)


def worker_abort(worker):
    """Called when a worker is killed."""
    worker.log.warning("Worker received SIGABRT signal (pid: %s)", worker.pid)
