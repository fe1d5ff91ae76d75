from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
import os
from app.core.config import settings
from app.core.cors import ALLOWED_HEADERS, function_response
from app.routes import bookings_router, notifications_router, functions_router, payment_status_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

FUNCTIONS_PREFIX = "/functions/v1"

# verify-payment answers {verified, ...}; the other functions answer {success, ...}
OUTCOME_KEYS = {f"{FUNCTIONS_PREFIX}/verify-payment": "verified"}

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Wedding marketplace API starting (debug=%s)", settings.DEBUG)
    if not settings.MOYASAR_SECRET_KEY:
        logger.warning("MOYASAR_SECRET_KEY is not set; payment functions will answer 500")
    yield

app = FastAPI(
    title="Wedding Marketplace API",
    description="Halls, vendors, bookings and Moyasar payments",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=ALLOWED_HEADERS,
)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    if request.url.path.startswith(FUNCTIONS_PREFIX):
        key = OUTCOME_KEYS.get(request.url.path.rstrip("/"), "success")
        return function_response({key: False, "error": "Invalid request body"}, 400)
    return await request_validation_exception_handler(request, exc)

# Include routers
app.include_router(bookings_router, prefix="/api/bookings", tags=["Bookings"])
app.include_router(notifications_router, prefix="/api/notifications", tags=["Notifications"])
app.include_router(functions_router, prefix=FUNCTIONS_PREFIX, tags=["Functions"])
app.include_router(payment_status_router, tags=["Payments"])

@app.get("/")
async def root():
    return {
        "message": "Welcome to the Wedding Marketplace API",
        "status": "healthy",
        "version": "1.0.0"
    }

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

@app.get("/ping")
async def ping():
    return {"message": "pong"}

if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("app.main:app", host="0.0.0.0", port=port, reload=settings.DEBUG)
