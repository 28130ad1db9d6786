# Server Socket
bind = "127.0.0.1:8000"  # Only accessible locally, NGINX will proxy requests

# Worker Settings
workers = 4
threads = 2
worker_class = "gthread"

# Candidate suggestions fan out lookups on their own small thread pool per request
timeout = 120
graceful_timeout = 90
keepalive = 5
max_requests = 1000  # Restart workers after processing 1000 requests (memory leak protection)
max_requests_jitter = 50

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"

# Process Name
proc_name = "academy_gunicorn"

wsgi_app = "app:app"
