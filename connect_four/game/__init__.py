"""
connect_four.game - Core game mechanics for Connect Four

This package contains the board, the move history, the game change commands
and the session that ties them together.
"""

from connect_four.game.board import Board
from connect_four.game.commands import CommandQueue, LoadGame, NewGame, SaveGame
from connect_four.game.history import MoveHistory
from connect_four.game.rules import DropResult, GameSession, SessionState

__all__ = ['Board', 'MoveHistory', 'CommandQueue', 'NewGame', 'SaveGame', 'LoadGame',
           'GameSession', 'SessionState', 'DropResult']
