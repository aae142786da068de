"""
connectfour.interfaces - User interfaces for Connect Four

This package contains the interactive console menu.
"""

# Don't import anything here to avoid circular imports
__all__ = []
