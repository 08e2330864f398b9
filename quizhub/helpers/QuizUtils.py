"""
Pure helpers for the weekly quiz: time status, draft validation, scoring,
leaderboard ranking, scheduling defaults and display formatting.

Nothing in here touches the database or reads the wall clock unless the
caller leaves ``now`` out of one of the scheduling helpers.
"""
import math
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

SUPPORTED_SUBJECTS = ("tsa", "plew", "maths")

SUBJECT_NAMES = {
    "tsa": "TSA Critical Thinking",
    "plew": "수능영어",
    "maths": "Maths A Level",
}

QUIZ_DURATION = timedelta(hours=1)
QUIZ_START_HOUR_UTC = 16
LEADERBOARD_TOP_SIZE = 10

STATUS_UPCOMING = "upcoming"
STATUS_ACTIVE = "active"
STATUS_COMPLETED = "completed"


def to_utc(value: Any) -> datetime:
    """
    Normalize an instant into an aware UTC datetime.

    Accepts datetimes (naive ones are taken as UTC, which is what pymongo
    hands back), ``{"seconds": N}`` timestamp mappings, ISO-8601 strings and
    epoch milliseconds.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, Mapping) and "seconds" in value:
        return datetime.fromtimestamp(value["seconds"], tz=timezone.utc)
    if isinstance(value, str):
        return to_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    raise TypeError(f"Unsupported timestamp value: {value!r}")


def _millis(delta: timedelta) -> int:
    return delta // timedelta(milliseconds=1)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def get_quiz_time_status(now: Any, scheduled_start: Any, scheduled_end: Any) -> Dict[str, Any]:
    """
    Derive the lifecycle phase of a quiz at ``now``.

    upcoming while ``now < start``, active while ``start <= now <= end``,
    completed afterwards. Durations are integer milliseconds.
    """
    now = to_utc(now)
    start = to_utc(scheduled_start)
    end = to_utc(scheduled_end)

    if now < start:
        return {
            "status": STATUS_UPCOMING,
            "timeUntilStart": _millis(start - now),
            "message": f"Starts {start.strftime('%A %H:%M')} GMT",
        }

    if start <= now <= end:
        remaining = _millis(end - now)
        return {
            "status": STATUS_ACTIVE,
            "timeRemaining": remaining,
            "message": f"{math.ceil(remaining / 60000)} minutes remaining",
        }

    return {
        "status": STATUS_COMPLETED,
        "message": "Quiz completed",
    }


def is_quiz_active(now: Any, scheduled_start: Any, scheduled_end: Any) -> bool:
    return get_quiz_time_status(now, scheduled_start, scheduled_end)["status"] == STATUS_ACTIVE


def get_time_until_next_event(now: Any, scheduled_start: Any, scheduled_end: Any) -> Dict[str, Any]:
    now = to_utc(now)
    start = to_utc(scheduled_start)
    end = to_utc(scheduled_end)

    if now < start:
        return {"event": "start", "timeRemaining": _millis(start - now), "eventTime": start}
    if now <= end:
        return {"event": "end", "timeRemaining": _millis(end - now), "eventTime": end}
    return {"event": "completed", "timeRemaining": 0, "eventTime": end}


def validate_quiz_data(quiz_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check a quiz draft for completeness. Every rule is checked on its own so
    the author sees all problems at once.
    """
    errors: List[str] = []

    subject = quiz_data.get("subject")
    if not subject or subject not in SUPPORTED_SUBJECTS:
        errors.append("Valid subject is required")

    title = quiz_data.get("title")
    if not isinstance(title, str) or len(title.strip()) < 3:
        errors.append("Title must be at least 3 characters")

    questions = quiz_data.get("questions")
    if not isinstance(questions, list) or len(questions) == 0:
        errors.append("At least one question is required")

    if isinstance(questions, list):
        for index, question in enumerate(questions, start=1):
            if not isinstance(question, Mapping):
                question = {}
            text = question.get("question")
            options = question.get("options")
            correct_answer = question.get("correctAnswer")
            has_options = isinstance(options, list)

            if not isinstance(text, str) or len(text.strip()) < 5:
                errors.append(f"Question {index}: Question text too short")

            if not has_options or len(options) < 2:
                errors.append(f"Question {index}: At least 2 options required")

            if not correct_answer or not has_options or correct_answer not in options:
                errors.append(f"Question {index}: Valid correct answer required")

    scheduled_start = quiz_data.get("scheduledStart")
    scheduled_end = quiz_data.get("scheduledEnd")
    if not scheduled_start:
        errors.append("Scheduled start time is required")
    if not scheduled_end:
        errors.append("Scheduled end time is required")

    if scheduled_start and scheduled_end:
        try:
            if to_utc(scheduled_end) <= to_utc(scheduled_start):
                errors.append("Scheduled end time must be after start time")
        except (TypeError, ValueError, OverflowError, OSError):
            errors.append("Scheduled times must be valid timestamps")

    return {
        "isValid": len(errors) == 0,
        "errors": errors,
    }


def score_answers(answers: List[str], correct_answers: List[str], total_questions: int) -> Dict[str, int]:
    """
    Compare answers position by position against the key. An empty answer
    never counts as correct. Raises ValueError when there is nothing to
    score against.
    """
    if isinstance(total_questions, bool) or not isinstance(total_questions, int) or total_questions <= 0:
        raise ValueError("Quiz must contain at least one question")

    correct_count = sum(
        1 for given, expected in zip(answers, correct_answers) if given and given == expected
    )
    return {
        "correctCount": correct_count,
        "percentageScore": round_half_up(100 * correct_count / total_questions),
    }


def rank_scores(all_scores: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # Higher percentage first, faster completion breaks ties, no shared ranks.
    ordered = sorted(
        all_scores,
        key=lambda score: (-score["percentageScore"], score["completionTimeSeconds"]),
    )
    return [{**score, "rank": index} for index, score in enumerate(ordered, start=1)]


def build_leaderboard(
    quiz_id: str,
    existing_scores: List[Dict[str, Any]],
    entry: Dict[str, Any],
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Append ``entry`` to the existing scores and rebuild the whole
    leaderboard document: ranks, top ten and aggregates.
    """
    all_scores = rank_scores([*existing_scores, entry])
    total_participants = len(all_scores)
    average = sum(score["percentageScore"] for score in all_scores) / total_participants

    return {
        "quizId": quiz_id,
        "allScores": all_scores,
        "topTen": all_scores[:LEADERBOARD_TOP_SIZE],
        "totalParticipants": total_participants,
        "averageScore": round_half_up(average),
        "lastUpdated": now or datetime.now(timezone.utc),
    }


def calculate_quiz_stats(attempts: List[Dict[str, Any]]) -> Dict[str, int]:
    if not attempts:
        return {
            "totalAttempts": 0,
            "averageScore": 0,
            "averageTime": 0,
            "perfectScores": 0,
        }

    total_attempts = len(attempts)
    average_score = sum(a["percentageScore"] for a in attempts) / total_attempts
    average_time = sum(a["completionTimeSeconds"] for a in attempts) / total_attempts
    perfect_scores = len([a for a in attempts if a["percentageScore"] == 100])

    return {
        "totalAttempts": total_attempts,
        "averageScore": round_half_up(average_score),
        "averageTime": round_half_up(average_time),
        "perfectScores": perfect_scores,
    }


def get_next_friday_4pm(now: Any = None) -> datetime:
    """Start of the next weekly quiz window, Friday 16:00 UTC."""
    now = to_utc(now) if now is not None else datetime.now(timezone.utc)
    days_until_friday = (4 - now.weekday()) % 7

    # Past 17:00 on a Friday the window is over, roll to next week.
    if days_until_friday == 0 and now.hour >= 17:
        days_until_friday = 7

    next_friday = now + timedelta(days=days_until_friday)
    return next_friday.replace(hour=QUIZ_START_HOUR_UTC, minute=0, second=0, microsecond=0)


def get_quiz_end_time(start_time: Any) -> datetime:
    return to_utc(start_time) + QUIZ_DURATION


def get_week_identifier(date: Any = None) -> str:
    """Friday of the given date's Sunday-based week, as YYYY-MM-DD."""
    date = to_utc(date) if date is not None else datetime.now(timezone.utc)
    day_of_week = (date.weekday() + 1) % 7
    friday = date + timedelta(days=5 - day_of_week)
    return friday.date().isoformat()


def generate_quiz_title(subject: str, date: Any = None) -> str:
    subject_name = SUBJECT_NAMES.get(subject, subject)
    return f"Weekly {subject_name} Quiz - {get_week_identifier(date)}"


def format_duration(milliseconds: float) -> str:
    seconds = int(milliseconds // 1000)
    minutes = seconds // 60
    remaining_seconds = seconds % 60
    if minutes > 0:
        return f"{minutes}m {remaining_seconds}s"
    return f"{remaining_seconds}s"


def format_completion_time(seconds: float) -> str:
    return format_duration(int(seconds) * 1000)
