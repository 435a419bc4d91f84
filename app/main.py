from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from app.core.config import settings
from app.core.exceptions import BookingError
from app.api import bookings
from app.core.logger import setup_logging, logger
from app.services.booking_store import BookingStore
from contextlib import asynccontextmanager
from datetime import datetime

setup_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"🚀 Starting {settings.PROJECT_NAME}")
    logger.info(f"Server listening on http://localhost:{settings.PORT}")
    yield
    # Shutdown
    logger.info(f"🛑 Shutting down ({len(app.state.store)} bookings discarded)")

async def booking_error_handler(request: Request, exc: BookingError):
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if isinstance(part, str) and part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "invalid request"
    logger.warning(f"{request.method} {request.url.path} -> 400: {message}")
    return JSONResponse(status_code=400, content={"error": message})

# Global Exception Handler
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"🔥 UNHANDLED ERROR: {str(exc)}", exc_info=True)
    return JSONResponse(status_code=500, content={"error": "internal server error"})

def create_app(store: BookingStore = None) -> FastAPI:
    """
    Build the API around a booking store. Each call gets its own store
    unless one is passed in, so tests can run against isolated instances.
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan
    )
    app.state.store = store if store is not None else BookingStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BookingError, booking_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(bookings.router, prefix=settings.API_PREFIX, tags=["Bookings"])

    @app.get("/", response_class=PlainTextResponse)
    async def liveness():
        return f"{settings.PROJECT_NAME} is up"

    @app.get("/health")
    async def health_check():
        return {
            "status": "ok",
            "environment": settings.ENVIRONMENT,
            "bookings": len(app.state.store),
            "timestamp": datetime.now().isoformat()
        }

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development"
    )
