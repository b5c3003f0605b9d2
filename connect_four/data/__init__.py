"""
connect_four.data - Save file handling for Connect Four

This package stores and restores game snapshots as JSON files.
"""

# Not re-exported here: data_manager and connect_four.game import each other
__all__ = []
