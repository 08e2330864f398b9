import logging
from typing import Optional, Union

from quizhub.helpers.QuizUtils import calculate_quiz_stats, score_answers
from quizhub.helpers.Utilities import Utils
from quizhub.models.QuizAttempt import QuizAttemptModel
from quizhub.models.Quizzes import QuizModel
from quizhub.schemas.QuizAttempt import QuizAttemptCreate
from quizhub.services.Leaderboard import LeaderboardService

logger = logging.getLogger(__name__)

TOP_PLAYER_FIELDS = ("userId", "displayName", "percentageScore", "completionTimeSeconds", "completedAt")
RANKING_SORT = [("percentageScore", -1), ("completionTimeSeconds", 1)]


class QuizAttemptService:
    def __init__(self):
        self.quiz_attempt_model = QuizAttemptModel()
        self.quiz_model = QuizModel()
        self.leaderboard_service = LeaderboardService()

    def submit_quiz_attempt(self, attempt_data: Union[QuizAttemptCreate, dict]) -> dict:
        """
        Score a finished attempt, store it and push the score onto the
        quiz leaderboard.

        The attempt insert and the leaderboard rewrite are separate writes.
        If the leaderboard write fails the stored attempt stays and the
        submission is reported as failed.
        """
        try:
            if not isinstance(attempt_data, QuizAttemptCreate):
                attempt_data = QuizAttemptCreate(**attempt_data)
            payload = attempt_data.model_dump()
            answer_key = payload.pop("correctAnswers")
            total_questions = payload["totalQuestions"]

            if answer_key is None or total_questions is None or payload["subject"] is None:
                quiz = self.quiz_model.get_quiz({"_id": payload["quizId"]})
                if not quiz:
                    return {"success": False, "data": None, "error": "Quiz not found"}
                if answer_key is None:
                    answer_key = quiz.answer_key()
                if total_questions is None:
                    total_questions = len(quiz.questions)
                if payload["subject"] is None:
                    payload["subject"] = quiz.subject

            try:
                result = score_answers(payload["answers"], answer_key, total_questions)
            except ValueError as e:
                return {"success": False, "data": None, "error": f"Invalid submission: {str(e)}"}

            attempt_id = Utils.new_id()
            payload.update({
                "_id": attempt_id,
                "attemptId": attempt_id,
                "answerKey": answer_key,
                "totalQuestions": total_questions,
                "correctAnswers": result["correctCount"],
                "percentageScore": result["percentageScore"],
            })
            attempt = self.quiz_attempt_model.create_attempt(payload)
            logger.info(
                "[Attempt] %s user=%s quiz=%s score=%s%%",
                attempt_id,
                attempt.userId,
                attempt.quizId,
                attempt.percentageScore,
            )

            leaderboard_result = self.leaderboard_service.apply_new_score(attempt.quizId, {
                "userId": attempt.userId,
                "displayName": attempt.displayName,
                "percentageScore": attempt.percentageScore,
                "completionTimeSeconds": attempt.completionTimeSeconds,
            })
            if not leaderboard_result["success"]:
                return {
                    "success": False,
                    "attemptId": attempt_id,
                    "data": None,
                    "error": leaderboard_result["error"]
                }

            return {
                "success": True,
                "attemptId": attempt_id,
                "data": attempt.model_dump()
            }
        except Exception as e:
            logger.error("[Attempt] submission failed: %s", e)
            return {
                "success": False,
                "data": None,
                "error": f"Unable to submit quiz attempt: {str(e)}"
            }

    def has_user_attempted(self, user_id: str, quiz_id: str) -> dict:
        try:
            attempted = self.quiz_attempt_model.get_completed_attempt(user_id, quiz_id) is not None
            return {
                "success": True,
                "hasAttempted": attempted,
                "data": attempted
            }
        except Exception as e:
            return {
                "success": False,
                "data": None,
                "error": f"Unable to check user attempt: {str(e)}"
            }

    def get_user_attempt(self, user_id: str, quiz_id: str) -> dict:
        try:
            attempt = self.quiz_attempt_model.get_completed_attempt(user_id, quiz_id)
            return {
                "success": True,
                "data": attempt.model_dump() if attempt else None
            }
        except Exception as e:
            return {
                "success": False,
                "data": None,
                "error": f"Unable to get user attempt: {str(e)}"
            }

    def get_top_players(self, quiz_id: str, limit: int = 10) -> dict:
        try:
            attempts = self.quiz_attempt_model.get_attempts(
                {"quizId": quiz_id, "isComplete": True}, RANKING_SORT, 0, limit
            )
            return {
                "success": True,
                "data": [{field: attempt.get(field) for field in TOP_PLAYER_FIELDS} for attempt in attempts]
            }
        except Exception as e:
            return {
                "success": False,
                "data": [],
                "error": f"Unable to get top players: {str(e)}"
            }

    def get_quiz_stats(self, quiz_id: str) -> dict:
        try:
            attempts = self.quiz_attempt_model.get_attempts({"quizId": quiz_id, "isComplete": True})
            stats = calculate_quiz_stats(attempts)
            return {
                "success": True,
                "data": {
                    "totalParticipants": stats["totalAttempts"],
                    "averageScore": stats["averageScore"],
                    "averageTime": stats["averageTime"],
                    "perfectScores": stats["perfectScores"],
                    "highestScore": max((a["percentageScore"] for a in attempts), default=0),
                    "fastestTime": min((a["completionTimeSeconds"] for a in attempts), default=0),
                }
            }
        except Exception as e:
            return {
                "success": False,
                "data": None,
                "error": f"Unable to get quiz stats: {str(e)}"
            }

    def get_all_time_leaderboard(self, subject: str, limit: int = 10) -> dict:
        try:
            attempts = self.quiz_attempt_model.get_attempts(
                {"subject": subject, "isComplete": True}, RANKING_SORT, 0, limit
            )
            return {
                "success": True,
                "data": attempts
            }
        except Exception as e:
            return {
                "success": False,
                "data": None,
                "error": f"Unable to get all-time leaderboard: {str(e)}"
            }

    def get_user_quiz_history(self, user_id: str, subject: Optional[str] = None, limit: int = 10) -> dict:
        try:
            filters = {"userId": user_id}
            if subject:
                filters["subject"] = subject
            attempts = self.quiz_attempt_model.get_attempts(filters, [("startedAt", -1)], 0, limit)
            return {
                "success": True,
                "data": attempts
            }
        except Exception as e:
            return {
                "success": False,
                "data": None,
                "error": f"Unable to get quiz history: {str(e)}"
            }
