from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel


class LeaderboardEntry(BaseModel):
    userId: str
    displayName: str
    percentageScore: int
    completionTimeSeconds: int
    rank: Optional[int] = None


class Leaderboard(BaseModel):
    quizId: str
    allScores: List[LeaderboardEntry] = []
    topTen: List[LeaderboardEntry] = []
    totalParticipants: int = 0
    averageScore: int = 0
    lastUpdated: Optional[datetime] = None


class UserRank(BaseModel):
    rank: int
    totalParticipants: int
    percentageScore: int
    completionTime: int
