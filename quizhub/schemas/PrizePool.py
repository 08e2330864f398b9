from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class PrizePool(BaseModel):
    quizId: str
    totalAmount: float = 500
    firstPlace: float = 250
    secondPlace: float = 150
    thirdPlace: float = 100
    currency: str = "USD"
    lastUpdated: Optional[datetime] = None


class PrizePoolUpdate(BaseModel):
    totalAmount: float = Field(ge=0)
    firstPlace: float = Field(ge=0)
    secondPlace: float = Field(ge=0)
    thirdPlace: float = Field(ge=0)
    currency: str = "USD"
