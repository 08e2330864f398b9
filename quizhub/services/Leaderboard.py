import logging
from typing import Union

from quizhub.helpers.QuizUtils import build_leaderboard
from quizhub.models.Leaderboard import LeaderboardModel
from quizhub.schemas.Leaderboard import Leaderboard, LeaderboardEntry, UserRank

logger = logging.getLogger(__name__)


class LeaderboardService:
    def __init__(self):
        self.leaderboard_model = LeaderboardModel()

    def apply_new_score(self, quiz_id: str, entry: Union[LeaderboardEntry, dict]) -> dict:
        """
        Read the stored leaderboard, append the score, re-rank and write the
        whole document back.

        This is a plain read-modify-write. Two submissions racing on the
        same quiz can both read the same snapshot, and the later write drops
        the other's score.
        """
        try:
            if not isinstance(entry, LeaderboardEntry):
                entry = LeaderboardEntry(**entry)
            score = entry.model_dump(exclude={"rank"})

            existing = self.leaderboard_model.get_leaderboard(quiz_id)
            existing_scores = existing.get("allScores", []) if existing else []

            leaderboard = build_leaderboard(quiz_id, existing_scores, score)
            self.leaderboard_model.save_leaderboard(quiz_id, leaderboard)
            logger.info(
                "[Leaderboard] %s rewritten participants=%s average=%s",
                quiz_id,
                leaderboard["totalParticipants"],
                leaderboard["averageScore"],
            )
            return {
                "success": True,
                "data": leaderboard
            }
        except Exception as e:
            logger.error("[Leaderboard] update failed for %s: %s", quiz_id, e)
            return {
                "success": False,
                "data": None,
                "error": f"Unable to update leaderboard: {str(e)}"
            }

    def get_leaderboard(self, quiz_id: str) -> dict:
        try:
            document = self.leaderboard_model.get_leaderboard(quiz_id)
            return {
                "success": True,
                "data": Leaderboard(**document).model_dump() if document else None
            }
        except Exception as e:
            return {
                "success": False,
                "data": None,
                "error": f"Unable to fetch leaderboard: {str(e)}"
            }

    def get_user_rank(self, quiz_id: str, user_id: str) -> dict:
        try:
            leaderboard_result = self.get_leaderboard(quiz_id)
            if not leaderboard_result["success"]:
                return leaderboard_result
            leaderboard = leaderboard_result["data"]
            if not leaderboard:
                return {"success": False, "data": None, "error": "Leaderboard not found"}

            for score in leaderboard["allScores"]:
                if score["userId"] == user_id:
                    rank = UserRank(
                        rank=score["rank"],
                        totalParticipants=leaderboard["totalParticipants"],
                        percentageScore=score["percentageScore"],
                        completionTime=score["completionTimeSeconds"],
                    )
                    return {"success": True, "data": rank.model_dump()}

            return {"success": False, "data": None, "error": "User not found in leaderboard"}
        except Exception as e:
            return {
                "success": False,
                "data": None,
                "error": f"Unable to get user rank: {str(e)}"
            }
