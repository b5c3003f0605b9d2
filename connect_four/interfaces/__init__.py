"""
connect_four.interfaces - User interfaces for Connect Four

This package contains the main menu model and the terminal interface that
drives a game session.
"""

# Don't import anything here to avoid circular imports
__all__ = []
