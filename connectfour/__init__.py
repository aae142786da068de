"""
connectfour - Two-player Connect Four for the console

This package provides the game engine (board, win detection and turn state
machine), a history log of finished games, an interactive console menu and
a Gymnasium environment wrapping the engine.
"""

# Version number
__version__ = '0.1.0'
