from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pymongo.database import Database
from pymongo.errors import PyMongoError
from typing import Optional
import time
import logging

from .api.v1.appointments import router as appointments_router
from .api.v1.auth import router as auth_router
from .api.v1.users import router as users_router
from .core.config import settings
from .core.database import create_client, ensure_indexes

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def create_app(database: Optional[Database] = None) -> FastAPI:
    """Build the application.

    ``database`` is used as-is when given; otherwise a client is created on
    startup from settings and closed on shutdown.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.VERSION,
        description="Appointment availability and booking API for a doctors portal",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.database = database
    app.state.mongo_client = None

    # Middleware setup
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Custom middleware for request logging and timing
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        # Log request
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response

    # Exception handlers
    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=404,
            content={
                "error": "Not Found",
                "message": "The requested resource was not found",
                "path": str(request.url.path)
            }
        )

    @app.exception_handler(PyMongoError)
    async def store_error_handler(request: Request, exc: PyMongoError):
        logger.error(f"Document store error on {request.url.path}: {str(exc)}")
        return JSONResponse(
            status_code=503,
            content={
                "error": "Service Unavailable",
                "message": "The document store is unavailable"
            }
        )

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.error(f"Internal server error: {str(exc)}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "message": "An unexpected error occurred"
            }
        )

    # Include routers
    app.include_router(appointments_router)
    app.include_router(auth_router)
    app.include_router(users_router)

    # Startup and shutdown events
    @app.on_event("startup")
    async def startup_event():
        """Connect to the document store and ensure indexes."""
        logger.info("Starting Doctors Portal...")

        if app.state.database is None:
            client = create_client()
            app.state.mongo_client = client
            app.state.database = client[settings.DATABASE_NAME]
            logger.info(f"Using MongoDB database '{settings.DATABASE_NAME}'")

        try:
            ensure_indexes(app.state.database)
        except PyMongoError as e:
            logger.error(f"Failed to initialize database: {str(e)}")
            raise

        logger.info("Application startup complete")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on application shutdown."""
        logger.info("Shutting down Doctors Portal...")
        if app.state.mongo_client is not None:
            app.state.mongo_client.close()

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": time.time(),
            "version": settings.VERSION
        }

    # Root endpoint
    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "doctors portal server is running.."

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
