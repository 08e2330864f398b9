"""
Singleton dependencies for resource management.
Services bind their Mongo collections once instead of on every request.
"""
from typing import Optional, TYPE_CHECKING

# Avoid circular imports
if TYPE_CHECKING:
    from quizhub.services.Leaderboard import LeaderboardService
    from quizhub.services.PrizePool import PrizePoolService
    from quizhub.services.QuizAttempts import QuizAttemptService
    from quizhub.services.Quizzes import QuizService

_quiz_service: Optional['QuizService'] = None
_quiz_attempt_service: Optional['QuizAttemptService'] = None
_leaderboard_service: Optional['LeaderboardService'] = None
_prize_pool_service: Optional['PrizePoolService'] = None


def get_quiz_service():
    """Get singleton QuizService instance"""
    global _quiz_service
    if _quiz_service is None:
        from quizhub.services.Quizzes import QuizService
        _quiz_service = QuizService()
    return _quiz_service


def get_quiz_attempt_service():
    """Get singleton QuizAttemptService instance"""
    global _quiz_attempt_service
    if _quiz_attempt_service is None:
        from quizhub.services.QuizAttempts import QuizAttemptService
        _quiz_attempt_service = QuizAttemptService()
    return _quiz_attempt_service


def get_leaderboard_service():
    """Get singleton LeaderboardService instance"""
    global _leaderboard_service
    if _leaderboard_service is None:
        from quizhub.services.Leaderboard import LeaderboardService
        _leaderboard_service = LeaderboardService()
    return _leaderboard_service


def get_prize_pool_service():
    """Get singleton PrizePoolService instance"""
    global _prize_pool_service
    if _prize_pool_service is None:
        from quizhub.services.PrizePool import PrizePoolService
        _prize_pool_service = PrizePoolService()
    return _prize_pool_service


def cleanup_resources():
    """
    Drop all singleton services. Call this on application shutdown.
    """
    global _quiz_service, _quiz_attempt_service, _leaderboard_service, _prize_pool_service

    _quiz_service = None
    _quiz_attempt_service = None
    _leaderboard_service = None
    _prize_pool_service = None
