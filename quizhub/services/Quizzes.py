import logging
from typing import Optional, Union

from quizhub.helpers.QuizUtils import (
    generate_quiz_title,
    get_next_friday_4pm,
    get_quiz_end_time,
    to_utc,
)
from quizhub.helpers.Utilities import Utils
from quizhub.models.Quizzes import QuizModel
from quizhub.schemas.Quizzes import QuizCreate, QuizStatus, ScheduleDefaults

logger = logging.getLogger(__name__)


class QuizService:
    def __init__(self):
        self.quiz_model = QuizModel()

    def create_quiz(self, data: Union[QuizCreate, dict]) -> dict:
        """
        Persist a quiz draft with a fresh id and status ``scheduled``.
        Drafts are expected to have gone through validate_quiz_data already.
        """
        try:
            quiz_data = data.model_dump() if isinstance(data, QuizCreate) else dict(data)
            for field in ("scheduledStart", "scheduledEnd"):
                if quiz_data.get(field):
                    quiz_data[field] = to_utc(quiz_data[field])

            quiz_id = Utils.new_id()
            quiz_data["_id"] = quiz_id
            quiz_data["quizId"] = quiz_id
            self.quiz_model.create_quiz(quiz_data)
            logger.info("[Quiz] created %s subject=%s", quiz_id, quiz_data.get("subject"))

            quiz_data.pop("_id")
            return {
                "success": True,
                "quizId": quiz_id,
                "data": quiz_data
            }
        except Exception as e:
            logger.error("[Quiz] create failed: %s", e)
            return {
                "success": False,
                "data": None,
                "error": f"Unable to create quiz: {str(e)}"
            }

    def get_current_quiz(self, subject: str) -> dict:
        try:
            quiz = self.quiz_model.get_current_quiz(subject)
            return {
                "success": True,
                "data": quiz.model_dump() if quiz else None
            }
        except Exception as e:
            logger.error("[Quiz] current quiz lookup failed for %s: %s", subject, e)
            return {
                "success": False,
                "data": None,
                "error": f"Unable to get current quiz: {str(e)}"
            }

    def get_quiz_by_id(self, quiz_id: str) -> dict:
        try:
            quiz = self.quiz_model.get_quiz({"_id": quiz_id})
            return {
                "success": True,
                "data": quiz.model_dump() if quiz else None
            }
        except Exception as e:
            return {
                "success": False,
                "data": None,
                "error": f"Unable to get quiz: {str(e)}"
            }

    def get_quizzes_by_subject(self, subject: str) -> dict:
        try:
            quizzes = self.quiz_model.list_quizzes({"subject": subject})
            return {
                "success": True,
                "data": quizzes
            }
        except Exception as e:
            logger.error("[Quiz] listing failed for %s: %s", subject, e)
            return {
                "success": False,
                "data": None,
                "error": f"Unable to get quizzes: {str(e)}"
            }

    def get_recent_quizzes(self, subject: str, limit: int = 5) -> dict:
        try:
            quizzes = self.quiz_model.list_quizzes({"subject": subject}, 0, limit)
            return {
                "success": True,
                "data": quizzes
            }
        except Exception as e:
            return {
                "success": False,
                "data": None,
                "error": f"Unable to get recent quizzes: {str(e)}"
            }

    def has_any_quizzes(self, subject: str) -> dict:
        try:
            count = self.quiz_model.count_quizzes({"subject": subject})
            return {
                "success": True,
                "hasQuizzes": count > 0,
                "count": count,
                "data": {"hasQuizzes": count > 0, "count": count}
            }
        except Exception as e:
            return {
                "success": False,
                "hasQuizzes": False,
                "data": None,
                "error": f"Unable to check for quizzes: {str(e)}"
            }

    def update_quiz_status(self, quiz_id: str, status: Union[QuizStatus, str]) -> dict:
        """
        Admin override of the stored status. The stored value is advisory,
        readers still derive the live phase from the scheduled window.
        """
        try:
            status = QuizStatus(status)
            updated = self.quiz_model.update_quiz(quiz_id, {"status": status.value})
            if not updated:
                return {
                    "success": False,
                    "data": None,
                    "error": "Quiz not found"
                }
            logger.info("[Quiz] %s status set to %s", quiz_id, status.value)
            return {
                "success": True,
                "data": {"quizId": quiz_id, "status": status.value}
            }
        except Exception as e:
            return {
                "success": False,
                "data": None,
                "error": f"Unable to update quiz status: {str(e)}"
            }

    def get_schedule_defaults(self, subject: str, now: Optional[object] = None) -> dict:
        try:
            start = get_next_friday_4pm(now)
            defaults = ScheduleDefaults(
                subject=subject,
                title=generate_quiz_title(subject, start),
                scheduledStart=start,
                scheduledEnd=get_quiz_end_time(start),
            )
            return {
                "success": True,
                "data": defaults.model_dump()
            }
        except Exception as e:
            return {
                "success": False,
                "data": None,
                "error": f"Unable to build schedule defaults: {str(e)}"
            }
