from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from quizhub.dependencies import get_quiz_attempt_service, get_quiz_service
from quizhub.helpers.QuizUtils import STATUS_ACTIVE, get_quiz_time_status
from quizhub.helpers.Utilities import Utils
from quizhub.middleware.JWTVerification import display_name_from, jwt_validator
from quizhub.schemas.QuizAttempt import AttemptSubmission, QuizAttemptCreate
from quizhub.schemas.Quizzes import Subject
from quizhub.schemas.ServerResponse import ServerResponse
from quizhub.services.QuizAttempts import QuizAttemptService
from quizhub.services.Quizzes import QuizService

router = APIRouter(prefix="/api/v1/quiz-attempts", tags=["QuizAttempts"])


@router.post("/submit", response_model=ServerResponse)
def submit_quiz_attempt(
    body: AttemptSubmission,
    service: QuizAttemptService = Depends(get_quiz_attempt_service),
    quiz_service: QuizService = Depends(get_quiz_service),
    jwt_payload: dict = Depends(jwt_validator)
):
    try:
        user_id = str(jwt_payload["id"])
        quiz_result = quiz_service.get_quiz_by_id(body.quizId)
        if not quiz_result["success"]:
            return Utils.create_response(None, False, quiz_result.get("error", ""))
        quiz = quiz_result["data"]
        if not quiz:
            return Utils.create_response(None, False, "Quiz not found")

        time_status = get_quiz_time_status(Utils.utcnow(), quiz["scheduledStart"], quiz["scheduledEnd"])
        if time_status["status"] != STATUS_ACTIVE:
            return Utils.create_response(None, False, "Quiz is not currently active")

        # Check and insert are separate round trips, see QuizAttemptService.
        attempt_check = service.has_user_attempted(user_id, body.quizId)
        if not attempt_check["success"]:
            return Utils.create_response(None, False, attempt_check.get("error", ""))
        if attempt_check["hasAttempted"]:
            return Utils.create_response(None, False, "You have already taken this quiz")

        attempt = QuizAttemptCreate(
            userId=user_id,
            quizId=body.quizId,
            subject=quiz["subject"],
            displayName=display_name_from(jwt_payload),
            answers=body.answers,
            correctAnswers=[question["correctAnswer"] for question in quiz["questions"]],
            totalQuestions=len(quiz["questions"]),
            completionTimeSeconds=body.completionTimeSeconds,
            startedAt=body.startedAt,
        )
        data = service.submit_quiz_attempt(attempt)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/has-attempted/{quiz_id}", response_model=ServerResponse)
def has_user_attempted(
    quiz_id: str,
    service: QuizAttemptService = Depends(get_quiz_attempt_service),
    jwt_payload: dict = Depends(jwt_validator)
):
    try:
        data = service.has_user_attempted(str(jwt_payload["id"]), quiz_id)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/user-attempt/{quiz_id}", response_model=ServerResponse)
def get_user_attempt(
    quiz_id: str,
    service: QuizAttemptService = Depends(get_quiz_attempt_service),
    jwt_payload: dict = Depends(jwt_validator)
):
    try:
        data = service.get_user_attempt(str(jwt_payload["id"]), quiz_id)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=404, detail={"data": None, "error": str(e), "success": False})


@router.get("/top-players/{quiz_id}", response_model=ServerResponse)
def get_top_players(
    quiz_id: str,
    limit: int = Query(10, ge=1),
    service: QuizAttemptService = Depends(get_quiz_attempt_service),
    jwt_payload: dict = Depends(jwt_validator)
):
    try:
        data = service.get_top_players(quiz_id, limit)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/stats/{quiz_id}", response_model=ServerResponse)
def get_quiz_stats(
    quiz_id: str,
    service: QuizAttemptService = Depends(get_quiz_attempt_service),
    jwt_payload: dict = Depends(jwt_validator)
):
    try:
        data = service.get_quiz_stats(quiz_id)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/all-time/{subject}", response_model=ServerResponse)
def get_all_time_leaderboard(
    subject: Subject,
    limit: int = Query(10, ge=1),
    service: QuizAttemptService = Depends(get_quiz_attempt_service),
    jwt_payload: dict = Depends(jwt_validator)
):
    try:
        data = service.get_all_time_leaderboard(subject.value, limit)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/history", response_model=ServerResponse)
def get_user_quiz_history(
    subject: Optional[Subject] = None,
    limit: int = Query(10, ge=1),
    service: QuizAttemptService = Depends(get_quiz_attempt_service),
    jwt_payload: dict = Depends(jwt_validator)
):
    try:
        data = service.get_user_quiz_history(
            str(jwt_payload["id"]), subject.value if subject else None, limit
        )
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})
