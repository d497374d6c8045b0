from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from app.config.settings import settings
from app.api.sessions import router as sessions_router
from app.agents.intake_workflow import get_intake_graph
from app.tools.drug_interactions import INTERACTION_RULES
import logging

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    logger.info("Starting MediGuard Clinical Review Service...")
    logger.info(f"Environment: {settings.environment}")

    get_intake_graph()
    logger.info(f"Drug interaction table loaded: {len(INTERACTION_RULES)} rules")

    yield

    # Shutdown: sessions live only in memory and are discarded with the process
    logger.info("Shutting down MediGuard Clinical Review Service...")


# Initialize FastAPI app
app = FastAPI(
    title="MediGuard - Clinical Review",
    description="MediGuard drafts treatment plans from patient intake data with an LLM, cross-checks them against a drug interaction table, and records the clinician's review in a compliance log.",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(sessions_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": settings.service_name,
        "version": settings.app_version,
        "dependencies": {
            "llm": "configured" if settings.openai_api_key else "not configured",
            "interaction_rules": len(INTERACTION_RULES),
        },
    }


@app.get("/")
async def root():
    return {
        "message": "MediGuard - Clinical Review Service",
        "description": "AI-drafted treatment plans with deterministic interaction checks and clinician sign-off",
        "version": settings.app_version,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.mediguard_port,
        reload=settings.environment == "development",
    )
