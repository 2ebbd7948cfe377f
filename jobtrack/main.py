# ========================================
# jobtrack/main.py
# ========================================

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from jobtrack.config import ALLOWED_ORIGINS, LOG_LEVEL
from jobtrack.database import connect_to_mongo, close_mongo_connection

# ===========================
# IMPORT ALL ROUTERS
# ===========================

# Job applications
from jobtrack.routes.analytics import router as analytics_router
from jobtrack.routes.job import router as job_router

# Third-party lookups
from jobtrack.routes.recruiter_search import router as recruiter_search_router
from jobtrack.routes.analysis import router as analysis_router
from jobtrack.routes.suggestions import router as suggestions_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"

# ===========================
# CREATE FASTAPI APP
# ===========================

app = FastAPI(
    title="JobTrack API",
    description="Personal job application tracker with recruiter search and ATS analysis",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# ===========================
# CORS MIDDLEWARE
# ===========================
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===========================
# DATABASE EVENTS
# ===========================

@app.on_event("startup")
async def start_db():
    """Connect to MongoDB on startup"""
    await connect_to_mongo()

@app.on_event("shutdown")
async def stop_db():
    """Close MongoDB connection on shutdown"""
    await close_mongo_connection()

# ===========================
# ERROR HANDLERS
# ===========================

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed or incomplete input is a plain 400."""
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": f"Database error: {exc}"})

# ===========================
# REGISTER ROUTERS
# ===========================

# Analytics must come before the jobs router so /api/jobs/analytics is not
# taken for a job id
app.include_router(analytics_router, tags=["Analytics"])
app.include_router(job_router, tags=["Jobs"])

app.include_router(recruiter_search_router, tags=["Recruiter Search"])
app.include_router(analysis_router, tags=["Job Description Analysis"])
app.include_router(suggestions_router, tags=["Suggestions"])

# ===========================
# ROOT ENDPOINTS
# ===========================

@app.get("/")
async def root():
    """API root endpoint with feature summary"""
    return {
        "status": "JobTrack API Running",
        "version": VERSION,
        "documentation": "/docs",
        "endpoints": {
            "jobs": [
                "/api/jobs (GET/POST)",
                "/api/jobs/{id} (GET/PUT/DELETE)",
                "/api/jobs/analytics",
                "/api/jobs/calendar"
            ],
            "lookups": [
                "/api/search-recruiters",
                "/api/analyze-job",
                "/api/suggestions/companies",
                "/api/suggestions/job-titles"
            ]
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    from jobtrack.database import get_db

    return {
        "status": "healthy",
        "database": "connected" if get_db() is not None else "disconnected",
        "version": VERSION
    }
