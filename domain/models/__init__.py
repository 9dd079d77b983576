"""
Domain models - pure data structures representing business entities.
"""

from domain.models.assignment import Assignment
from domain.models.match_record import MatchRecord
from domain.models.player import Player, RatedPlayer

__all__ = ["Assignment", "MatchRecord", "Player", "RatedPlayer"]
