"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from .auth.router import router as auth_router
from .clients.router import router as clients_router
from .programs.router import router as programs_router
from .enrollments.router import router as enrollments_router
from .database import Base, engine
from .config import settings
from .exceptions import register_exception_handlers
from .core.middleware import setup_middlewares
# Import all models so their tables are registered on Base.metadata
from .auth import models as auth_models  # noqa: F401
from .clients import models as client_models  # noqa: F401
from .programs import models as program_models  # noqa: F401
from .enrollments import models as enrollment_models  # noqa: F401

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create database tables if they don't exist
Base.metadata.create_all(bind=engine)

logger.info("Starting Clinic Programs API...")

# Create FastAPI application
app = FastAPI(
    title="Clinic Programs API",
    description="API for managing clients, clinical programs and enrollments",
    version="1.0.0"
)

# Register exception handlers
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware
setup_middlewares(app)

# Include routers
app.include_router(auth_router, prefix="/auth", tags=["Authentication"])
app.include_router(programs_router, prefix="/program", tags=["Programs"])
app.include_router(clients_router, prefix="/clients", tags=["Clients"])
app.include_router(enrollments_router, prefix="/enrollments", tags=["Enrollments"])

# Root endpoint
@app.get("/")
def root():
    """
    Root endpoint for API health check.

    Returns:
        dict: Simple welcome message
    """
    return {"message": "Welcome to Clinic Programs API", "version": app.version}

# Health check endpoint
@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns:
        dict: Health status information
    """
    return {"status": "healthy", "database": engine.dialect.name}
