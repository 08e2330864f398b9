from fastapi import APIRouter, Depends, HTTPException
from quizhub.dependencies import get_leaderboard_service
from quizhub.helpers.Utilities import Utils
from quizhub.middleware.JWTVerification import jwt_validator
from quizhub.schemas.ServerResponse import ServerResponse
from quizhub.services.Leaderboard import LeaderboardService

router = APIRouter(prefix="/api/v1/leaderboard", tags=["Leaderboard"])


@router.get("/{quiz_id}", response_model=ServerResponse)
def get_leaderboard(
    quiz_id: str,
    service: LeaderboardService = Depends(get_leaderboard_service),
    jwt_payload: dict = Depends(jwt_validator)
):
    try:
        data = service.get_leaderboard(quiz_id)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/{quiz_id}/rank", response_model=ServerResponse)
def get_user_rank(
    quiz_id: str,
    service: LeaderboardService = Depends(get_leaderboard_service),
    jwt_payload: dict = Depends(jwt_validator)
):
    try:
        data = service.get_user_rank(quiz_id, str(jwt_payload["id"]))
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=404, detail={"data": None, "error": str(e), "success": False})
