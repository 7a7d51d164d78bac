import multiprocessing
import os

bind = f"0.0.0.0:{os.getenv('PORT', '8000')}"

# Requests are CPU-light but hold a DB connection for a full platform
# recompute, so keep workers near the pool size rather than 2*cores+1
workers = int(os.getenv("WEB_CONCURRENCY", min(4, multiprocessing.cpu_count() + 1)))
worker_class = "uvicorn.workers.UvicornWorker"
timeout = int(os.getenv("GUNICORN_TIMEOUT", "180"))
graceful_timeout = 30
keepalive = 5

# Recycle workers now and then so long-running processes do not creep
max_requests = 2000
max_requests_jitter = 200

proc_name = "mediashare-revenue-api"

# 📊 Everything goes to stdout; the platform collects container logs
loglevel = os.getenv("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)s %(D)sus id=%({x-request-id}o)s'

logconfig_dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "generic": {"format": "%(asctime)s [%(process)d] [%(levelname)s] %(name)s: %(message)s"},
    },
    "handlers": {
        "stdout": {
            "class": "logging.StreamHandler",
            "formatter": "generic",
            "stream": "ext://sys.stdout",
        },
    },
    "root": {"level": loglevel.upper(), "handlers": ["stdout"]},
    "loggers": {
        "gunicorn.error": {"level": loglevel.upper(), "handlers": ["stdout"], "propagate": False},
        "gunicorn.access": {"level": "INFO", "handlers": ["stdout"], "propagate": False},
    },
}
