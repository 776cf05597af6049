import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scheme_finder.config import settings
from scheme_finder.routes import eligibility_router, schemes_router, users_router
from scheme_finder.services.mongo_service import mongo_service

# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await mongo_service.connect()
    yield
    # Shutdown
    await mongo_service.close()


app = FastAPI(
    title=settings.app_name,
    description="Discover government welfare schemes and check eligibility",
    version=settings.app_version,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(schemes_router, prefix=settings.api_prefix)
app.include_router(eligibility_router, prefix=settings.api_prefix)
app.include_router(users_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {"message": f"{settings.app_name} API is running", "version": settings.app_version}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    database = "up" if mongo_service.db is not None and await mongo_service.health_check() else "down"
    return {"status": "healthy", "service": "scheme-finder", "database": database}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("scheme_finder.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
