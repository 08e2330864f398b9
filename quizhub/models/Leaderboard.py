from typing import Optional

from quizhub.helpers.Database import MongoDB


class LeaderboardModel:
    def __init__(self, db_name: Optional[str] = None, collection_name: str = "quizLeaderboards"):
        self.collection = MongoDB.get_database(db_name)[collection_name]

    def get_leaderboard(self, quiz_id: str) -> Optional[dict]:
        return self.collection.find_one({"_id": quiz_id})

    def save_leaderboard(self, quiz_id: str, leaderboard: dict) -> None:
        """
        Overwrite the whole leaderboard document. Last writer wins.
        """
        self.collection.replace_one({"_id": quiz_id}, {"_id": quiz_id, **leaderboard}, upsert=True)
