from datetime import datetime, timezone
from typing import List, Optional

from quizhub.helpers.Database import MongoDB
from quizhub.schemas.QuizAttempt import QuizAttempt


class QuizAttemptModel:
    def __init__(self, db_name: Optional[str] = None, collection_name: str = "quizAttempts"):
        self.collection = MongoDB.get_database(db_name)[collection_name]
        # Lookup index only. It is not unique, a second concurrent submission still lands.
        self.collection.create_index([("userId", 1), ("quizId", 1), ("isComplete", 1)])
        self.collection.create_index([("quizId", 1), ("percentageScore", -1), ("completionTimeSeconds", 1)])

    def create_attempt(self, data: dict) -> QuizAttempt:
        """
        Insert a completed attempt document.
        """
        data["completedAt"] = datetime.now(timezone.utc)
        data["isComplete"] = True
        attempt = QuizAttempt(**data)
        self.collection.insert_one(attempt.model_dump(by_alias=True))
        return attempt

    def get_attempt(self, filters: dict) -> Optional[QuizAttempt]:
        document = self.collection.find_one(filters)
        if document:
            return QuizAttempt(**document)
        return None

    def get_completed_attempt(self, user_id: str, quiz_id: str) -> Optional[QuizAttempt]:
        return self.get_attempt({"userId": user_id, "quizId": quiz_id, "isComplete": True})

    def get_attempts(
        self,
        filters: dict = {},
        sort: Optional[List[tuple]] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[dict]:
        """
        Matching attempts. ``limit=None`` returns all of them, a limit below
        one returns none.
        """
        if limit is not None and limit < 1:
            return []
        cursor = self.collection.find(filters)
        if sort:
            cursor = cursor.sort(sort)
        cursor = cursor.skip(skip)
        if limit is not None:
            cursor = cursor.limit(limit)
        return list(cursor)

    def count_attempts(self, filters: dict) -> int:
        return self.collection.count_documents(filters)
