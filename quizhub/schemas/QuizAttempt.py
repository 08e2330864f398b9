from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class AttemptSubmission(BaseModel):
    """Body a student posts when finishing the current quiz."""
    quizId: str
    answers: List[str]
    completionTimeSeconds: int = Field(ge=0)
    startedAt: Optional[datetime] = None


class QuizAttemptCreate(BaseModel):
    userId: str
    quizId: str
    subject: Optional[str] = None
    displayName: str
    answers: List[str]
    correctAnswers: Optional[List[str]] = None  # answer key; taken from the quiz when omitted
    totalQuestions: Optional[int] = None
    completionTimeSeconds: int = Field(ge=0)
    startedAt: Optional[datetime] = None


class QuizAttempt(BaseModel):
    id: str = Field(alias="_id")
    attemptId: str
    userId: str
    quizId: str
    subject: Optional[str] = None
    displayName: str
    answers: List[str]
    answerKey: List[str]
    totalQuestions: int
    correctAnswers: int
    percentageScore: int
    completionTimeSeconds: int
    startedAt: Optional[datetime] = None
    completedAt: datetime
    isComplete: bool = True

    class Config:
        populate_by_name = True
