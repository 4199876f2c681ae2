"""
FastAPI Application Entry Point - Order Management Service
"""
import time
import uuid
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from order_management.config import settings
from order_management.exceptions import CollaboratorError, NotFoundError, OrderServiceError, ValidationError
from order_management.logger import add_context, clear_context, configure_logging, get_logger
from order_management.api import orders, health

logger = get_logger(__name__)

ERROR_STATUS_CODES = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    CollaboratorError: status.HTTP_502_BAD_GATEWAY,
}


def _error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    body = {
        "status_code": status_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": request.url.path,
        "method": request.method,
        "message": message,
    }
    if status_code >= 500:
        logger.error("request_failed", **body)
    else:
        logger.warning("request_rejected", **body)
    return JSONResponse(status_code=status_code, content=body)


async def order_service_error_handler(request: Request, exc: OrderServiceError) -> JSONResponse:
    status_code = next(
        (code for error_type, code in ERROR_STATUS_CODES.items() if isinstance(exc, error_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    return _error_response(request, status_code, exc.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(request, exc.status_code, str(exc.detail))


async def log_requests(request: Request, call_next):
    """Bind a request ID to the log context and log every request"""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    clear_context()
    add_context(request_id=request_id)
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("request_crashed", method=request.method, path=request.url.path)
        raise

    response.headers["X-Request-ID"] = request_id
    logger.info(
        "request_completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
    )
    return response


def create_app() -> FastAPI:
    """Build the FastAPI application"""
    app = FastAPI(
        title="Order Management Service",
        description="API for managing orders in an e-commerce platform",
        version=settings.SERVICE_VERSION,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    app.add_exception_handler(OrderServiceError, order_service_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(orders.router)

    # Prometheus metrics
    Instrumentator().instrument(app).expose(app)

    @app.on_event("startup")
    def startup_event():
        """Configure logging and report collaborator wiring"""
        configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
        logger.info(
            "service_starting",
            service=settings.SERVICE_NAME,
            port=settings.SERVICE_PORT,
            order_store=settings.ORDER_STORE_BACKEND,
            customer_service_url=settings.CUSTOMER_SERVICE_URL,
            inventory_service_url=settings.INVENTORY_SERVICE_URL,
            rabbitmq_url=settings.RABBITMQ_URL,
        )

    @app.on_event("shutdown")
    def shutdown_event():
        """Cleanup on shutdown"""
        logger.info("service_stopping", service=settings.SERVICE_NAME)

    return app


app = create_app()


def run() -> None:
    """Run the service with uvicorn"""
    import uvicorn

    configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
    uvicorn.run(
        "order_management.main:app",
        host=settings.SERVICE_HOST,
        port=settings.SERVICE_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
