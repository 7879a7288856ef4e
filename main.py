from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import CORS_ORIGINS, HOST, PORT
from app.core.errors import register_exception_handlers
from app.db.base import Base, engine, db_dependency
from app.db.session import check_database_status
from app.api.v1.task import router as task_router
from app.utils.logger import configure_logging
import logging

# Import all models to register them with SQLAlchemy
from app.db.models import Task

configure_logging()

app = FastAPI(title="TaskFlow API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(task_router)


@app.on_event("startup")
async def startup_event():
    # Create tables
    Base.metadata.create_all(bind=engine)
    logging.info("Application started - task table ready")


@app.get("/", status_code=status.HTTP_200_OK)
async def root():
    return {"message": "Welcome to TaskFlow API"}


@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check(db: db_dependency):
    return check_database_status(db)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app="main:app", host=HOST, port=PORT, reload=True)
