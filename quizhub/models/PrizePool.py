from typing import Optional

from quizhub.helpers.Database import MongoDB


class PrizePoolModel:
    def __init__(self, db_name: Optional[str] = None, collection_name: str = "prizePools"):
        self.collection = MongoDB.get_database(db_name)[collection_name]

    def get_prize_pool(self, quiz_id: str) -> Optional[dict]:
        return self.collection.find_one({"_id": quiz_id}, {"_id": 0})

    def save_prize_pool(self, quiz_id: str, data: dict) -> None:
        self.collection.replace_one({"_id": quiz_id}, {"_id": quiz_id, **data}, upsert=True)
