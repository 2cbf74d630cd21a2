# gunicorn -c gunicorn.conf.py authgate.wsgi:app
import os

wsgi_app = "authgate.wsgi:app"

# Bind & workers
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
# Several workers only share codes and secret rotations through REDIS_URL
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = 1
timeout = 30
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by the container runtime)
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Trust proxy headers (see USE_PROXYFIX)
forwarded_allow_ips = "*"
proxy_protocol = False
