from datetime import datetime, timedelta, timezone

import pytest

from quizhub.helpers.QuizUtils import (
    build_leaderboard,
    calculate_quiz_stats,
    format_completion_time,
    format_duration,
    generate_quiz_title,
    get_next_friday_4pm,
    get_quiz_end_time,
    get_quiz_time_status,
    get_time_until_next_event,
    get_week_identifier,
    is_quiz_active,
    rank_scores,
    score_answers,
    validate_quiz_data,
)

START = datetime(2026, 10, 16, 16, 0, tzinfo=timezone.utc)
END = START + timedelta(hours=1)


def _entry(user_id, percentage, seconds):
    return {
        "userId": user_id,
        "displayName": user_id.title(),
        "percentageScore": percentage,
        "completionTimeSeconds": seconds,
    }


class TestTimeStatus:
    def test_upcoming_reports_countdown_and_start(self):
        status = get_quiz_time_status(START - timedelta(minutes=5), START, END)
        assert status["status"] == "upcoming"
        assert status["timeUntilStart"] == 5 * 60 * 1000
        assert status["message"] == "Starts Friday 16:00 GMT"

    def test_active_rounds_minutes_up(self):
        status = get_quiz_time_status(START + timedelta(minutes=30, seconds=30), START, END)
        assert status["status"] == "active"
        assert status["timeRemaining"] == (29 * 60 + 30) * 1000
        assert status["message"] == "30 minutes remaining"

    def test_window_bounds_are_inclusive(self):
        assert get_quiz_time_status(START, START, END)["status"] == "active"
        assert get_quiz_time_status(END, START, END)["status"] == "active"
        assert get_quiz_time_status(END, START, END)["message"] == "0 minutes remaining"

    def test_completed_after_end(self):
        status = get_quiz_time_status(END + timedelta(microseconds=1), START, END)
        assert status == {"status": "completed", "message": "Quiz completed"}

    @pytest.mark.parametrize("offset_minutes", [-600, -1, 0, 1, 59, 60, 61, 6000])
    def test_phases_partition_time(self, offset_minutes):
        now = START + timedelta(minutes=offset_minutes)
        status = get_quiz_time_status(now, START, END)["status"]
        expected = [
            name for name, holds in (
                ("upcoming", now < START),
                ("active", START <= now <= END),
                ("completed", now > END),
            ) if holds
        ]
        assert [status] == expected

    def test_accepts_timestamp_mappings_and_other_shapes(self):
        start = {"seconds": int(START.timestamp())}
        end = {"seconds": int(END.timestamp())}
        now_ms = int((START + timedelta(minutes=1)).timestamp() * 1000)
        assert get_quiz_time_status(now_ms, start, end)["status"] == "active"
        assert get_quiz_time_status("2026-10-16T15:00:00Z", start, end)["status"] == "upcoming"

    def test_naive_datetimes_are_utc(self):
        naive_start = START.replace(tzinfo=None)
        naive_end = END.replace(tzinfo=None)
        assert get_quiz_time_status(START + timedelta(minutes=1), naive_start, naive_end)["status"] == "active"

    def test_is_active_and_next_event(self):
        assert is_quiz_active(START + timedelta(minutes=1), START, END)
        assert not is_quiz_active(END + timedelta(minutes=1), START, END)

        assert get_time_until_next_event(START - timedelta(seconds=2), START, END) == {
            "event": "start", "timeRemaining": 2000, "eventTime": START,
        }
        assert get_time_until_next_event(END - timedelta(seconds=3), START, END)["event"] == "end"
        assert get_time_until_next_event(END + timedelta(days=1), START, END) == {
            "event": "completed", "timeRemaining": 0, "eventTime": END,
        }


class TestValidateQuizData:
    def _valid(self):
        return {
            "subject": "tsa",
            "title": "Weekly quiz",
            "questions": [
                {"question": "Which is larger?", "options": ["1", "2"], "correctAnswer": "2"},
            ],
            "scheduledStart": START,
            "scheduledEnd": END,
        }

    def test_valid_draft(self):
        assert validate_quiz_data(self._valid()) == {"isValid": True, "errors": []}

    def test_empty_questions_is_an_error(self):
        draft = {**self._valid(), "questions": []}
        result = validate_quiz_data(draft)
        assert not result["isValid"]
        assert result["errors"] == ["At least one question is required"]

    def test_correct_answer_must_be_an_option(self):
        draft = self._valid()
        draft["questions"].append(
            {"question": "Pick a colour", "options": ["red", "blue"], "correctAnswer": "green"}
        )
        result = validate_quiz_data(draft)
        assert result["errors"] == ["Question 2: Valid correct answer required"]

    def test_every_rule_is_reported(self):
        result = validate_quiz_data({
            "subject": "history",
            "title": " ab ",
            "questions": [{"question": "hi", "options": ["only"], "correctAnswer": ""}],
        })
        assert result["isValid"] is False
        assert result["errors"] == [
            "Valid subject is required",
            "Title must be at least 3 characters",
            "Question 1: Question text too short",
            "Question 1: At least 2 options required",
            "Question 1: Valid correct answer required",
            "Scheduled start time is required",
            "Scheduled end time is required",
        ]

    def test_malformed_questions_do_not_raise(self):
        result = validate_quiz_data({**self._valid(), "questions": [None, {"options": "ab"}]})
        assert "Question 1: Question text too short" in result["errors"]
        assert "Question 2: At least 2 options required" in result["errors"]
        assert "Question 2: Valid correct answer required" in result["errors"]

    def test_end_must_follow_start(self):
        draft = {**self._valid(), "scheduledEnd": START}
        assert validate_quiz_data(draft)["errors"] == ["Scheduled end time must be after start time"]


class TestScoring:
    def test_counts_matching_positions(self):
        assert score_answers(["A", "B", "C"], ["A", "X", "C"], 3) == {"correctCount": 2, "percentageScore": 67}

    def test_unanswered_never_matches(self):
        assert score_answers(["", "B"], ["", "B"], 2) == {"correctCount": 1, "percentageScore": 50}

    def test_half_rounds_up(self):
        assert score_answers(["A"], ["A"], 8)["percentageScore"] == 13

    def test_short_answer_list(self):
        assert score_answers(["A"], ["A", "B", "C", "D"], 4) == {"correctCount": 1, "percentageScore": 25}

    @pytest.mark.parametrize("total", [0, -1, None, 2.5])
    def test_rejects_non_positive_totals(self, total):
        with pytest.raises(ValueError):
            score_answers([], [], total)


class TestLeaderboard:
    def test_ties_broken_by_completion_time(self):
        scores = []
        for entry in (_entry("a", 80, 120), _entry("b", 80, 90), _entry("c", 60, 50)):
            scores = build_leaderboard("quiz-1", scores, entry)["allScores"]

        assert [(s["userId"], s["rank"]) for s in scores] == [("b", 1), ("a", 2), ("c", 3)]

    def test_ranks_are_positional_on_full_ties(self):
        ranked = rank_scores([_entry("a", 50, 10), _entry("b", 50, 10)])
        assert [s["rank"] for s in ranked] == [1, 2]

    def test_aggregates_ignore_submission_order(self):
        entries = [_entry(f"u{i}", score, 30 + i) for i, score in enumerate([100, 33, 67, 50, 0])]
        forward = []
        for entry in entries:
            forward = build_leaderboard("quiz-1", forward, entry)["allScores"]
        backward_board = None
        backward = []
        for entry in reversed(entries):
            backward_board = build_leaderboard("quiz-1", backward, entry)
            backward = backward_board["allScores"]

        assert backward_board["totalParticipants"] == 5
        assert backward_board["averageScore"] == 50
        assert [s["userId"] for s in forward] == [s["userId"] for s in backward]

    def test_top_ten_is_prefix_of_all_scores(self):
        scores = []
        board = None
        for i in range(13):
            board = build_leaderboard("quiz-1", scores, _entry(f"u{i}", (i * 37) % 101, 100 - i))
            scores = board["allScores"]
            assert board["topTen"] == board["allScores"][:min(10, board["totalParticipants"])]
        assert len(board["topTen"]) == 10

    def test_average_rounds_half_up(self):
        board = build_leaderboard("quiz-1", [_entry("a", 50, 1)], _entry("b", 51, 1))
        assert board["averageScore"] == 51

    def test_existing_entries_are_not_mutated(self):
        existing = [_entry("a", 10, 5)]
        build_leaderboard("quiz-1", existing, _entry("b", 90, 5))
        assert "rank" not in existing[0]


class TestScheduling:
    def test_next_friday_from_midweek(self):
        assert get_next_friday_4pm(datetime(2026, 10, 14, 10, tzinfo=timezone.utc)) == START

    def test_friday_before_close_stays_on_same_day(self):
        assert get_next_friday_4pm(datetime(2026, 10, 16, 12, tzinfo=timezone.utc)) == START

    def test_friday_evening_rolls_over(self):
        assert get_next_friday_4pm(datetime(2026, 10, 16, 18, tzinfo=timezone.utc)) == START + timedelta(days=7)

    def test_saturday_rolls_to_next_week(self):
        assert get_next_friday_4pm(datetime(2026, 10, 17, 9, tzinfo=timezone.utc)) == START + timedelta(days=7)

    def test_end_time_is_one_hour_later(self):
        assert get_quiz_end_time(START) == END

    def test_week_identifier_and_title(self):
        assert get_week_identifier(datetime(2026, 10, 14, tzinfo=timezone.utc)) == "2026-10-16"
        assert generate_quiz_title("maths", START) == "Weekly Maths A Level Quiz - 2026-10-16"
        assert generate_quiz_title("tsa", START) == "Weekly TSA Critical Thinking Quiz - 2026-10-16"


class TestFormatting:
    def test_format_duration(self):
        assert format_duration(125_400) == "2m 5s"
        assert format_duration(9_999) == "9s"

    def test_format_completion_time(self):
        assert format_completion_time(61) == "1m 1s"
        assert format_completion_time(45) == "45s"

    def test_quiz_stats(self):
        attempts = [
            {"percentageScore": 100, "completionTimeSeconds": 40},
            {"percentageScore": 50, "completionTimeSeconds": 81},
        ]
        assert calculate_quiz_stats(attempts) == {
            "totalAttempts": 2,
            "averageScore": 75,
            "averageTime": 61,
            "perfectScores": 1,
        }
        assert calculate_quiz_stats([])["totalAttempts"] == 0
