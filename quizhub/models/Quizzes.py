from datetime import datetime, timezone
from typing import List, Optional

from quizhub.helpers.Database import MongoDB
from quizhub.schemas.Quizzes import Quiz, QuizStatus


class QuizModel:
    def __init__(self, db_name: Optional[str] = None, collection_name: str = "Quizzes"):
        self.collection = MongoDB.get_database(db_name)[collection_name]
        self.collection.create_index([("subject", 1), ("scheduledStart", -1)])

    def create_quiz(self, data: dict) -> str:
        data["createdAt"] = datetime.now(timezone.utc)
        data["status"] = QuizStatus.SCHEDULED.value
        result = self.collection.insert_one(data)
        return result.inserted_id

    def get_quiz(self, filters: dict) -> Optional[Quiz]:
        document = self.collection.find_one(filters)
        if document:
            return Quiz(**document)
        return None

    def get_current_quiz(self, subject: str) -> Optional[Quiz]:
        """
        Latest scheduled quiz for a subject whose stored status is still
        scheduled or active.
        """
        cursor = self.collection.find(
            {
                "subject": subject,
                "status": {"$in": [QuizStatus.SCHEDULED.value, QuizStatus.ACTIVE.value]},
            }
        ).sort("scheduledStart", -1).limit(1)
        for document in cursor:
            return Quiz(**document)
        return None

    def list_quizzes(self, filters: dict = {}, skip: int = 0, limit: Optional[int] = None) -> List[dict]:
        if limit is not None and limit < 1:
            return []
        cursor = self.collection.find(filters).sort("scheduledStart", -1).skip(skip)
        if limit is not None:
            cursor = cursor.limit(limit)
        return list(cursor)

    def count_quizzes(self, filters: dict) -> int:
        return self.collection.count_documents(filters)

    def update_quiz(self, quiz_id: str, data: dict) -> bool:
        data["updatedAt"] = datetime.now(timezone.utc)
        result = self.collection.update_one(
            {"_id": quiz_id},
            {"$set": data}
        )
        return result.matched_count > 0
