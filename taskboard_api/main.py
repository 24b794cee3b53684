import time
from fastapi import APIRouter, FastAPI, Depends, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session
from typing import List, Optional
from contextlib import asynccontextmanager

from taskboard_api import crud, schemas
from taskboard_api.database import get_db, init_db
from taskboard_api.config import get_settings
from taskboard_api.exceptions import PersistenceError
from taskboard_api.logger import get_logger

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events"""
    logger.info(f"Starting {settings.app_name}")
    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {str(e)}")
        raise

    yield

    logger.info(f"Shutting down {settings.app_name}")


# Interactive docs are not served in production
app_docs_url = None if settings.is_production else "/docs"

app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Remote procedures for creating, listing, editing and deleting tasks",
    docs_url=app_docs_url,
    redoc_url=None if settings.is_production else "/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_credentials,
    allow_methods=settings.cors_methods,
    allow_headers=settings.cors_headers,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} completed in {process_time:.3f}s "
        f"with status: {response.status_code}"
    )

    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.exception_handler(PersistenceError)
async def persistence_exception_handler(request: Request, exc: PersistenceError):
    logger.error(f"Database error: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database error occurred"}
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred"}
    )


# Health check endpoints
@app.get("/health", tags=["Health"])
def health_check():
    """Basic health check"""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/health/ready", tags=["Health"])
def readiness_check(db: Session = Depends(get_db)):
    """Check if service is ready (including database)"""
    try:
        db.execute(text("SELECT 1"))
        return {
            "status": "ready",
            "service": settings.app_name,
            "database": "connected",
            "tasks": crud.get_tasks_count(db)
        }
    except Exception as e:
        logger.error(f"Readiness check failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not ready"
        )


@app.get("/", tags=["Root"])
def read_root():
    """Root endpoint"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.version,
        "docs": app_docs_url,
        "rpc": settings.rpc_prefix
    }


# Task procedures
rpc = APIRouter(prefix=settings.rpc_prefix, tags=["Tasks"])


@rpc.post("/getTasks", response_model=List[schemas.Task])
def get_tasks(db: Session = Depends(get_db)):
    """All tasks, newest first"""
    return crud.get_tasks(db)


@rpc.post("/getTask", response_model=Optional[schemas.Task])
def get_task(params: schemas.GetTaskInput, db: Session = Depends(get_db)):
    """A single task, or null when it does not exist"""
    return crud.get_task(db, task_id=params.id)


@rpc.post("/createTask", response_model=schemas.Task)
def create_task(params: schemas.CreateTaskInput, db: Session = Depends(get_db)):
    return crud.create_task(db, task=params)


@rpc.post("/updateTask", response_model=Optional[schemas.Task])
def update_task(params: schemas.UpdateTaskInput, db: Session = Depends(get_db)):
    """Apply the supplied fields, or null when the task does not exist"""
    return crud.update_task(db, task_id=params.id, task=params)


@rpc.post("/deleteTask", response_model=bool)
def delete_task(params: schemas.DeleteTaskInput, db: Session = Depends(get_db)):
    """True when a task was removed, false when nothing matched"""
    return crud.delete_task(db, task_id=params.id)


app.include_router(rpc)
