"""
Domain services containing pure business logic.
"""

from domain.services.match_result_service import apply_match_result
from domain.services.pair_history_service import build_pair_counts
from domain.services.team_balancing_service import TeamBalancingService
from domain.services.team_change_service import detect_changes

__all__ = ["TeamBalancingService", "apply_match_result", "build_pair_counts", "detect_changes"]
