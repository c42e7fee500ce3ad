"""Gunicorn production configuration for the bulk import API."""
import multiprocessing
import os

wsgi_app = "bulkimport.main:app"
chdir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "backend")

bind = os.getenv("BIND", "0.0.0.0:8000")
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"

# Large imports are processed row by row inside the request.
timeout = int(os.getenv("GUNICORN_TIMEOUT", "300"))
graceful_timeout = 30
keepalive = 5
max_requests = 1000
max_requests_jitter = 100

accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info")
