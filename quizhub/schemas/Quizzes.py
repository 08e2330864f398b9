from datetime import datetime
from enum import Enum
from typing import Any, List, Optional
from pydantic import BaseModel, Field


class Subject(str, Enum):
    TSA = "tsa"
    PLEW = "plew"
    MATHS = "maths"


class QuizStatus(str, Enum):
    SCHEDULED = "scheduled"
    ACTIVE = "active"
    COMPLETED = "completed"


class Question(BaseModel):
    question: str
    options: List[str]
    correctAnswer: str


class QuizCreate(BaseModel):
    # Untyped so validate_quiz_data sees malformed drafts and reports them.
    subject: Any = None
    title: Any = None
    description: Optional[str] = None
    questions: Any = []
    scheduledStart: Any = None
    scheduledEnd: Any = None


class Quiz(BaseModel):
    id: str = Field(alias="_id")
    quizId: str
    subject: str
    title: str
    description: Optional[str] = None
    questions: List[Question] = []
    scheduledStart: datetime
    scheduledEnd: datetime
    status: QuizStatus = QuizStatus.SCHEDULED
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    class Config:
        populate_by_name = True

    def answer_key(self) -> List[str]:
        return [question.correctAnswer for question in self.questions]


class QuizStatusUpdate(BaseModel):
    status: QuizStatus


class ScheduleDefaults(BaseModel):
    subject: str
    title: str
    scheduledStart: datetime
    scheduledEnd: datetime
