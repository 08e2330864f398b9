from fastapi import APIRouter, Depends, HTTPException, Query
from quizhub.dependencies import get_prize_pool_service, get_quiz_service
from quizhub.helpers.QuizUtils import get_quiz_time_status, validate_quiz_data
from quizhub.helpers.Utilities import Utils
from quizhub.middleware.JWTVerification import admin_validator, jwt_validator
from quizhub.schemas.PrizePool import PrizePoolUpdate
from quizhub.schemas.Quizzes import QuizCreate, QuizStatusUpdate, Subject
from quizhub.schemas.ServerResponse import ServerResponse
from quizhub.services.PrizePool import PrizePoolService
from quizhub.services.Quizzes import QuizService

router = APIRouter(prefix="/api/v1/quiz", tags=["Quizzes"])


@router.post("/create", response_model=ServerResponse)
def create_quiz(
    body: QuizCreate,
    service: QuizService = Depends(get_quiz_service),
    jwt_payload: dict = Depends(admin_validator)
):
    try:
        validation = validate_quiz_data(body.model_dump())
        if not validation["isValid"]:
            return Utils.create_response(
                {"errors": validation["errors"]}, False, "; ".join(validation["errors"])
            )
        data = service.create_quiz(body)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/current/{subject}", response_model=ServerResponse)
def get_current_quiz(
    subject: Subject,
    service: QuizService = Depends(get_quiz_service),
    jwt_payload: dict = Depends(jwt_validator)
):
    try:
        data = service.get_current_quiz(subject.value)
        quiz = data["data"]
        if quiz:
            # Stored status is advisory, the live phase comes from the window.
            quiz["timeStatus"] = get_quiz_time_status(
                Utils.utcnow(), quiz["scheduledStart"], quiz["scheduledEnd"]
            )
        return Utils.create_response(quiz, data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/subject/{subject}", response_model=ServerResponse)
def get_quizzes_by_subject(
    subject: Subject,
    service: QuizService = Depends(get_quiz_service),
    jwt_payload: dict = Depends(jwt_validator)
):
    try:
        data = service.get_quizzes_by_subject(subject.value)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/recent/{subject}", response_model=ServerResponse)
def get_recent_quizzes(
    subject: Subject,
    limit: int = Query(5, ge=1),
    service: QuizService = Depends(get_quiz_service),
    jwt_payload: dict = Depends(jwt_validator)
):
    try:
        data = service.get_recent_quizzes(subject.value, limit)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/exists/{subject}", response_model=ServerResponse)
def has_any_quizzes(
    subject: Subject,
    service: QuizService = Depends(get_quiz_service),
    jwt_payload: dict = Depends(jwt_validator)
):
    try:
        data = service.has_any_quizzes(subject.value)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/schedule-defaults/{subject}", response_model=ServerResponse)
def get_schedule_defaults(
    subject: Subject,
    service: QuizService = Depends(get_quiz_service),
    jwt_payload: dict = Depends(admin_validator)
):
    try:
        data = service.get_schedule_defaults(subject.value)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.patch("/status/{quiz_id}", response_model=ServerResponse)
def update_quiz_status(
    quiz_id: str,
    body: QuizStatusUpdate,
    service: QuizService = Depends(get_quiz_service),
    jwt_payload: dict = Depends(admin_validator)
):
    try:
        data = service.update_quiz_status(quiz_id, body.status)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/prize-pool/{quiz_id}", response_model=ServerResponse)
def get_quiz_prize_pool(
    quiz_id: str,
    service: PrizePoolService = Depends(get_prize_pool_service),
    jwt_payload: dict = Depends(jwt_validator)
):
    try:
        data = service.get_quiz_prize_pool(quiz_id)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.put("/prize-pool/{quiz_id}", response_model=ServerResponse)
def update_quiz_prize_pool(
    quiz_id: str,
    body: PrizePoolUpdate,
    service: PrizePoolService = Depends(get_prize_pool_service),
    jwt_payload: dict = Depends(admin_validator)
):
    try:
        data = service.update_quiz_prize_pool(quiz_id, body)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})
