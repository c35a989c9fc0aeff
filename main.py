import sys
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from gridiron_iq.infrastructure.settings import LOG_LEVEL
from gridiron_iq.infrastructure.db.session import Base, engine
from gridiron_iq.infrastructure.db.models.user_model import UserModel
from gridiron_iq.infrastructure.db.models.athlete_model import AthleteModel
from gridiron_iq.infrastructure.db.models.quiz_model import QuizModel
from gridiron_iq.infrastructure.db.models.question_model import QuestionModel
from gridiron_iq.infrastructure.db.models.attempt_model import QuizAttemptModel
from gridiron_iq.infrastructure.db.models.progress_model import ProgressModel
from gridiron_iq.presentation.api.routers.quiz_router import router as quiz_router
from gridiron_iq.presentation.api.routers.athlete_iq_router import router as athlete_iq_router

# Create tables
Base.metadata.create_all(bind=engine)

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(title="GridIron LegacyAI Football IQ API")

# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "An internal server error occurred."}
    )

# Include routers
app.include_router(quiz_router)
app.include_router(athlete_iq_router)


@app.get("/")
def root():
    return {"message": "Welcome to GridIron LegacyAI Football IQ API"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
