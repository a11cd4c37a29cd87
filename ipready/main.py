from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from loguru import logger
from ipready.core.config import settings
from ipready.core.logging_conf import setup_logging
from ipready.db.session import init_models
from ipready.api.v1 import routes_query, routes_proteins, routes_documents

setup_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Starting {settings.PROJECT_NAME} {settings.VERSION}...")
    await init_models()
    if not settings.ANTHROPIC_API_KEY:
        logger.warning("ANTHROPIC_API_KEY is not set; questions with matching documents will fail")
    yield
    # Shutdown
    logger.info("Shutting down...")

app = FastAPI(
    title="Protein IP Readiness API",
    description="Cited question answering over research documents and IP-readiness gap analysis for proteins",
    version=settings.VERSION,
    lifespan=lifespan
)

# Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(routes_query.router, prefix="/api/v1/query", tags=["Question Answering"])
app.include_router(routes_proteins.router, prefix="/api/v1/proteins", tags=["Proteins"])
app.include_router(routes_documents.router, prefix="/api/v1/documents", tags=["Documents"])

@app.get("/healthz")
async def health_check():
    return {"status": "healthy", "version": settings.VERSION}
