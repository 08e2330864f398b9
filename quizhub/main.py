import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI

from quizhub.controllers import Leaderboard, QuizAttempt, Quizzes
from quizhub.dependencies import cleanup_resources
from quizhub.helpers.Database import MongoDB
from quizhub.helpers.Logger import configure_logging
from quizhub.middleware.Cors import add_cors_middleware
from quizhub.middleware.GlobalErrorHandling import GlobalErrorHandlingMiddleware

load_dotenv()
configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="QuizHub",
    description="QuizHub - Weekly timed quizzes, leaderboards and prize pools",
    version="1.0.0",
    docs_url="/api-docs",
    redoc_url="/api-redoc",
)

# Middleware
app.add_middleware(GlobalErrorHandlingMiddleware)
add_cors_middleware(app)

app.include_router(Quizzes.router)
app.include_router(QuizAttempt.router)
app.include_router(Leaderboard.router)


@app.on_event("startup")
def startup_event():
    if MongoDB.client is None:
        MongoDB.connect(os.getenv("MONGODB_CONNECTION_STRING"))
    logger.info("MongoDB connected db=%s", os.getenv("DB_NAME"))


@app.on_event("shutdown")
def shutdown_event():
    logger.info("Shutting down QuizHub...")
    cleanup_resources()
    MongoDB.close()


@app.get("/")
def root():
    return {
        "service": "QuizHub",
        "status": "running",
        "description": "Weekly quiz engine",
    }


@app.get("/health")
def health_check():
    """Health check endpoint to verify the server is running"""
    db_status = MongoDB.connection_status()
    return {
        "status": "healthy",
        "database": db_status,
        "service": "QuizHub",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("quizhub.main:app", host="0.0.0.0", port=3003, reload=True)
