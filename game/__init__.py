"""Vibe Coding Simulator game package.

Public API:
    from game import GameSession, GameState, JobState, FeedMessage, Modifiers
"""
from game.entities import CommandResult, FeedMessage, GameState, JobState, Modifiers
from game.simulation import GameSession, new_game_state

__all__ = ["CommandResult", "FeedMessage", "GameSession", "GameState", "JobState", "Modifiers", "new_game_state"]
