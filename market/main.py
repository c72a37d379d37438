"""
Marketplace API.
FastAPI async backend; product listing/registration for sellers, seller mypage sales statistics;
JWT auth with role (buyer/seller/admin).
"""
from __future__ import annotations

import time
import uuid as uuid_lib

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from prometheus_client import Counter, Histogram, generate_latest
from starlette.responses import Response

from market.api import auth, products, seller_mypage
from market.config import get_settings
from market.core.errors import MarketError
from market.core.logging import get_logger, request_id_ctx

settings = get_settings()
logger = get_logger("market", settings.log_level.upper())

# Sentry (configurable via SENTRY_DSN)
if settings.sentry_dsn:
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.app_env,
        traces_sample_rate=0.1,
        integrations=[FastApiIntegration()],
    )

app = FastAPI(
    title="Marketplace API",
    description="Produce marketplace: product listing and registration, seller sales statistics.",
    version="1.0.0",
    openapi_tags=[
        {"name": "products", "description": "Product search, detail, registration and category statistics"},
        {"name": "seller-mypage", "description": "Seller sales history and statistics"},
        {"name": "auth", "description": "JWT login"},
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Prometheus metrics
REQUEST_COUNT = Counter("http_requests_total", "Total requests", ["method", "path", "status"])
REQUEST_LATENCY = Histogram("http_request_duration_seconds", "Request latency", ["method", "path"])


@app.middleware("http")
async def request_id_and_metrics(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid_lib.uuid4())
    request_id_ctx.set(request_id)
    start = time.perf_counter()
    method = request.scope.get("method", "")
    response = await call_next(request)
    duration = time.perf_counter() - start
    # Route template keeps the label set bounded; unmatched paths share one label
    route = request.scope.get("route")
    path = getattr(route, "path", "unmatched")
    REQUEST_COUNT.labels(method=method, path=path, status=response.status_code).inc()
    REQUEST_LATENCY.labels(method=method, path=path).observe(duration)
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(MarketError)
async def market_error_handler(request: Request, exc: MarketError) -> JSONResponse:
    logger.warning(
        exc.message,
        extra={"status_code": exc.status_code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


prefix = settings.api_prefix
app.include_router(products.router, prefix=prefix)
app.include_router(seller_mypage.router, prefix=prefix)
app.include_router(auth.router, prefix=prefix)

app.mount(settings.images_url, StaticFiles(directory=settings.images_root, check_dir=False), name="images")


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/metrics")
async def metrics():
    return Response(generate_latest(), media_type="text/plain")


@app.get("/")
async def root():
    return {"message": "Marketplace API", "docs": "/docs"}
