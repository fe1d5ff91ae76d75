import os

bind = f"0.0.0.0:{os.getenv('PORT', '8000')}"

workers = int(os.getenv("WEB_CONCURRENCY", "2"))

worker_class = "uvicorn.workers.UvicornWorker"

wsgi_app = "app.main:app"

timeout = 120
keepalive = 5
