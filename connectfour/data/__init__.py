"""
connectfour.data - Persistence for Connect Four

This package stores the summaries of finished games in a plain text
history file.
"""

from connectfour.data.history import (DEFAULT_HISTORY_FILE, append_result, clear_history,
                                      ensure_history_file, history_exists, history_sink,
                                      read_history)

__all__ = ['DEFAULT_HISTORY_FILE', 'append_result', 'clear_history', 'ensure_history_file',
           'history_exists', 'history_sink', 'read_history']
