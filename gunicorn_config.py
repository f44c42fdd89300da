"""Gunicorn configuration for production.

Run with: gunicorn -c gunicorn_config.py "booking_app:create_app()"
"""
import multiprocessing
import os

# Server socket
port = os.getenv("PORT", "8000")
bind = f"0.0.0.0:{port}"
backlog = 2048

# Worker processes
workers_env = os.getenv("GUNICORN_WORKERS")
if workers_env:
    workers = int(workers_env)
else:
    workers = min(multiprocessing.cpu_count() * 2 + 1, 8)

# Requests wait on the booking service; threads keep workers responsive
worker_class = "gthread"
threads = int(os.getenv("GUNICORN_THREADS", "4"))
# Longer than BOOKING_API_TIMEOUT plus GET retries
timeout = int(os.getenv("GUNICORN_TIMEOUT", "120"))
keepalive = 5
graceful_timeout = 30

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info")
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'
capture_output = True

# Process naming
proc_name = "flight-booking-app"

# Server mechanics
daemon = False
pidfile = None
umask = 0
