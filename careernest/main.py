"""
FastAPI Application Entry Point
Main application setup and route registration
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from careernest.config import settings
from careernest.errors import DomainError
from careernest.repositories import get_store

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Campus engagement platform for students, organizations and admins",
    version="1.0.0",
    debug=settings.DEBUG
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    """Expected business failures become {"success": false, "message": ...}"""
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None)
    )


# Startup event
@app.on_event("startup")
async def startup():
    """Run on application startup"""
    await get_store().connect()
    logger.info("%s started in %s mode (%s storage)", settings.APP_NAME, settings.APP_ENV, settings.STORAGE_BACKEND)


# Shutdown event
@app.on_event("shutdown")
async def shutdown():
    """Run on application shutdown"""
    await get_store().disconnect()
    logger.info("%s shut down", settings.APP_NAME)


# Health check endpoint
@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": "1.0.0"
    }


# Import and include routers
from careernest.routes import admin, auth, courses, events, organization, public, student

app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(public.router, prefix="/api/organizations", tags=["Public"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])
app.include_router(organization.router, prefix="/api/organization", tags=["Organization"])
app.include_router(student.router, prefix="/api/student", tags=["Student"])
app.include_router(courses.router, prefix="/api/courses", tags=["Courses"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "careernest.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
