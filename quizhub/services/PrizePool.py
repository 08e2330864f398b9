from typing import Union

from quizhub.helpers.Utilities import Utils
from quizhub.models.PrizePool import PrizePoolModel
from quizhub.schemas.PrizePool import PrizePool, PrizePoolUpdate


class PrizePoolService:
    def __init__(self):
        self.prize_pool_model = PrizePoolModel()

    def get_quiz_prize_pool(self, quiz_id: str) -> dict:
        """Stored prize pool for the quiz, or the default 500 USD split."""
        try:
            document = self.prize_pool_model.get_prize_pool(quiz_id)
            if document:
                return {"success": True, "data": document}
            default_pool = PrizePool(quizId=quiz_id, lastUpdated=Utils.utcnow())
            return {"success": True, "data": default_pool.model_dump()}
        except Exception as e:
            return {
                "success": False,
                "data": None,
                "error": f"Unable to get quiz prize pool: {str(e)}"
            }

    def update_quiz_prize_pool(self, quiz_id: str, prize_data: Union[PrizePoolUpdate, dict]) -> dict:
        try:
            if not isinstance(prize_data, PrizePoolUpdate):
                prize_data = PrizePoolUpdate(**prize_data)
            prize_pool = PrizePool(quizId=quiz_id, lastUpdated=Utils.utcnow(), **prize_data.model_dump())
            data = prize_pool.model_dump()
            self.prize_pool_model.save_prize_pool(quiz_id, data)
            return {"success": True, "data": data}
        except Exception as e:
            return {
                "success": False,
                "data": None,
                "error": f"Unable to update quiz prize pool: {str(e)}"
            }
