"""
connect_four - Two player Connect Four with save and load

This package provides a Connect Four board of any size, a game session that
enforces turn order and detects wins, JSON save files, and a terminal
interface with a main menu for picking the board size.
"""

__version__ = '0.1.0'
