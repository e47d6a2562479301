# Serve with: gunicorn -c gunicorn.conf.py "cook_service:create_app()"
import os

# Bind & workers
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = int(os.getenv("GUNICORN_THREADS", "4"))
# Keep above STORE_TIMEOUT_SECONDS so storage deadlines fire first
timeout = 30
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (the app itself logs JSON to stdout)
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

forwarded_allow_ips = "*"
proxy_protocol = False
