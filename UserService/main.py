from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from api.controllers import user_router
from api.controllers.user_controller import MISSING_FIELDS
from business.user import UserService
from config.settings import settings
from service.orders import OrderClient
from service.storage import create_user_store
import logging

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the storage backend and order client; abort startup if the backend cannot be initialized"""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Storage backend: {settings.backend_name}")
    logger.info(f"Order service URL: {settings.ORDER_SERVICE_URL}")
    
    store = create_user_store(settings)
    try:
        store.initialize()
    except Exception as e:
        logger.error(f"❌ Failed to initialize {store.backend_name} backend: {str(e)}")
        store.close()
        raise
    
    order_client = OrderClient(settings.ORDER_SERVICE_URL, timeout=settings.ORDER_SERVICE_TIMEOUT)
    app.state.user_service = UserService(store, order_client)
    logger.info(f"✅ {settings.APP_NAME} ready (using {store.backend_name})")
    
    yield
    
    logger.info(f"Shutting down {settings.APP_NAME}")
    app.state.user_service.close()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="User microservice backed by DynamoDB or PostgreSQL",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(user_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Unparseable request bodies are reported like missing fields"""
    logger.warning(f"Invalid request body for {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": MISSING_FIELDS}
    )


@app.get("/", tags=["health"])
async def root():
    """Root endpoint - health check"""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "backend": settings.backend_name,
        "order_service": settings.ORDER_SERVICE_URL
    }


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "backend": settings.backend_name
    }


def run():
    import uvicorn
    
    logger.info(f"Starting server on {settings.API_HOST}:{settings.API_PORT}")
    
    uvicorn.run(
        app,
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
