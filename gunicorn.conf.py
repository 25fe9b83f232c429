# Gunicorn configuration for the blogdesk admin console
# Run with: gunicorn -c gunicorn.conf.py "blogdesk:create_app()"

import multiprocessing
import os

# Server socket
bind = os.getenv("GUNICORN_BIND", "127.0.0.1:8000")

# Worker processes
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() + 1))
# Read by create_app, which refuses a per-process cache when workers > 1
os.environ["WEB_CONCURRENCY"] = str(workers)
worker_class = "gthread"
threads = int(os.getenv("GUNICORN_THREADS", 4))

# Worker lifecycle
max_requests = 1000
max_requests_jitter = 100
# Keep above REMOTE_TIMEOUT_SECONDS
timeout = 30
keepalive = 2
preload_app = True

# Security
limit_request_line = 4096
limit_request_fields = 100
limit_request_field_size = 8190

# Process management: only drop privileges when running as root
if hasattr(os, "geteuid") and os.geteuid() == 0:
    user = os.getenv("GUNICORN_USER", "blogdesk")
    group = os.getenv("GUNICORN_GROUP", "blogdesk")

# Logging
accesslog = os.getenv("GUNICORN_ACCESS_LOG", "-")
errorlog = os.getenv("GUNICORN_ERROR_LOG", "-")
loglevel = os.getenv("GUNICORN_LOG_LEVEL", "info")
access_log_format = '%(h)s %(t)s "%(r)s" %(s)s %(b)s %(D)s "%({x-request-id}i)s"'

worker_tmp_dir = "/dev/shm"
