"""
cli.py - Console menu for playing Connect Four

This module provides the interactive text interface: the main menu, board
setup with dimension validation, the two-player game loop, and viewing or
clearing the game history.
"""

import argparse
from typing import List, Optional

from connectfour.debug import debug, DebugLevel, LEVEL_NAMES
from connectfour.utils import MIN_ROWS, MIN_COLS, GameStatus, InvalidDimensionError, HistoryError
from connectfour.game.rules import GameEngine, create_game
from connectfour.data.history import (DEFAULT_HISTORY_FILE, ensure_history_file,
                                      history_exists, history_sink, read_history,
                                      clear_history)

# Upper bound on board size accepted from the keyboard
MAX_DIMENSION = 100

MENU_OPTIONS = {
    1: "Start New Game",
    2: "View Game History",
    3: "Delete Game History",
    4: "Exit Game",
}


class ConsoleMenu:
    """Interactive console menu for two human players."""

    def __init__(self, history_file: str = DEFAULT_HISTORY_FILE):
        self.history_file = history_file
        self.args = None

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(description='Connect Four console game')
        parser.add_argument('command', nargs='?', default='menu',
                            choices=['menu', 'history', 'clear-history'],
                            help='What to do (default: open the interactive menu)')
        parser.add_argument('--history-file', default=self.history_file,
                            help='Path to the game history file')
        parser.add_argument('--yes', action='store_true',
                            help='Skip the confirmation when clearing history')
        parser.add_argument('--debug', action='store_true', help='Enable debug logging')
        parser.add_argument('--debug-level', default='warning', choices=sorted(LEVEL_NAMES),
                            help='Logging level (default: warning)')
        parser.add_argument('--log-file', default=None, help='Also write log messages to this file')
        parser.add_argument('--debug-components', default=None,
                            help='Comma-separated components to log (board, game, env, history, cli)')

        self.args = parser.parse_args(argv)
        self.history_file = self.args.history_file

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)
        if self.args.debug_components:
            components = [c.strip() for c in self.args.debug_components.split(',') if c.strip()]
            debug.configure(components=components)

        return self.args

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the command selected on the command line."""
        if self.args is None:
            self.parse_args(argv)

        try:
            ensure_history_file(self.history_file)
        except HistoryError as e:
            print(str(e))

        if self.args.command == 'history':
            self.view_game_history(wait=False)
        elif self.args.command == 'clear-history':
            self.delete_game_history(confirm=not self.args.yes)
        else:
            self.main_menu()
        return 0

    def main_menu(self) -> None:
        """Display the main menu until the user chooses to exit."""
        while True:
            print("\n==== Connect Four Game ====")
            for number, label in MENU_OPTIONS.items():
                print(f"{number}. {label}")

            choice = input(f"Please select an option (1-{len(MENU_OPTIONS)}): ").strip()
            try:
                choice = int(choice)
            except ValueError:
                print(f"Invalid input. Please enter a number between 1-{len(MENU_OPTIONS)}.")
                continue

            if choice == 1:
                self.start_new_game()
            elif choice == 2:
                self.view_game_history()
            elif choice == 3:
                self.delete_game_history()
            elif choice == 4:
                print("\nThank you for playing!")
                return
            else:
                print(f"Invalid choice. Please enter 1-{len(MENU_OPTIONS)}.")

    def start_new_game(self) -> None:
        """Play games until the user declines a rematch."""
        while True:
            engine = self.setup_game()
            self.play_game(engine)
            if not self.ask_to_play_again():
                print("Returning to main menu...")
                return

    def setup_game(self) -> GameEngine:
        """
        Ask for board dimensions until a valid game can be created.

        Returns:
            A new engine wired to the history file
        """
        while True:
            print("\n=== Game Setup ===")
            rows = self.get_dimension_input("rows", MIN_ROWS)
            cols = self.get_dimension_input("columns", MIN_COLS)
            try:
                engine = create_game(rows, cols, on_result=history_sink(self.history_file))
            except InvalidDimensionError as e:
                print(f"\nError: {e}")
                print("Please try again with valid dimensions.")
                continue

            print(f"\nGame board set to {rows} rows and {cols} columns.")
            return engine

    def get_dimension_input(self, dimension_type: str, minimum: int) -> int:
        """
        Read an integer dimension.

        Empty, non-numeric and oversized input re-prompts. Values below the
        minimum are returned so that board creation reports them.
        """
        while True:
            user_input = input(f"Enter number of {dimension_type} (minimum {minimum}): ").strip()
            if not user_input:
                print("Input cannot be empty. Please try again.")
                continue
            try:
                value = int(user_input)
            except ValueError:
                print("Invalid input. Please enter a valid number.")
                continue

            if value > MAX_DIMENSION:
                print(f"Too many {dimension_type}. Please enter at most {MAX_DIMENSION}.")
                continue
            return value

    def play_game(self, engine: GameEngine) -> None:
        """Alternate turns until the game is won or drawn."""
        print(f"\nGame started at: {engine.started_at:%Y-%m-%d %H:%M:%S}")
        saved = True

        while not engine.is_game_over():
            print()
            print(engine.render())
            print(f"Player {engine.current_player}'s turn")
            column = self.get_valid_column(engine.cols)

            try:
                move = engine.attempt_move(column)
            except HistoryError as e:
                print(str(e))
                saved = False
                continue

            if move.column_full:
                print("Column is full. Please choose another column.")

        print()
        print(engine.render())
        if engine.status == GameStatus.DRAW:
            print("\nThe game is a draw!")
        else:
            print(f"\nPlayer {engine.status.winner} wins!")

        if saved:
            print("Game result saved to history.")

    def get_valid_column(self, cols: int) -> int:
        """
        Get a column from the player.

        Returns:
            0-indexed column chosen by the player (entered 1-based)
        """
        while True:
            user_input = input(f"Select column (1-{cols}): ").strip()
            try:
                column = int(user_input) - 1
            except ValueError:
                print("Invalid input. Please enter a number.")
                continue

            if 0 <= column < cols:
                return column
            print(f"Invalid column. Enter 1 to {cols}.")

    def ask_to_play_again(self) -> bool:
        response = input("\nWould you like to play again? (yes/no): ").strip().lower()
        return response == "yes"

    def view_game_history(self, wait: bool = True) -> None:
        """Print every recorded game."""
        try:
            lines = read_history(self.history_file)
        except HistoryError as e:
            print(str(e))
            return

        if not lines:
            print("\nNo game history found.")
            return

        print("\n==== Game History ====")
        for line in lines:
            print(line)
        print("======================")

        if wait:
            input("Press Enter to continue...")

    def delete_game_history(self, confirm: bool = True) -> None:
        """Erase the history file after confirmation."""
        if not history_exists(self.history_file):
            print("\nNo game history to delete.")
            return

        if confirm:
            response = input("\nAre you sure you want to delete ALL game history? (yes/no): ")
            if response.strip().lower() != "yes":
                print("Operation cancelled.")
                return

        try:
            clear_history(self.history_file)
        except HistoryError as e:
            print(str(e))
            return
        print("Game history deleted successfully.")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the console game."""
    menu = ConsoleMenu()
    return menu.run(argv)


if __name__ == "__main__":
    raise SystemExit(main())
