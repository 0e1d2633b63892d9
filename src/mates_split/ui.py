"""Interactive UI components for picking roommates."""

import logging
from typing import Any

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

logger = logging.getLogger(__name__)


def fuzzy_match(query: str, text: str) -> bool:
    """
    Fuzzy match: all characters in query must appear in order in text.

    Example:
        query="al" matches "Alice"
        query="bb" matches "Bobby"
    """
    query_idx = 0
    for char in text:
        if query_idx < len(query) and char == query[query_idx]:
            query_idx += 1
    return query_idx == len(query)


class RoommateCompleter(Completer):
    """Fuzzy search completer for roster names."""

    def __init__(self, roster: list[str]):
        """Initialize the completer with the current roster."""
        self.roster = roster

    def get_completions(self, document: Document, complete_event: Any):
        """Get fuzzy-matched completions."""
        query = document.text.lower()

        for name in self.roster:
            if not query or fuzzy_match(query, name.lower()):
                yield Completion(
                    text=name,
                    start_position=-len(document.text),
                    display=name,
                )


def select_roommate_interactive(roster: list[str], prompt: str = "Paid by") -> str | None:
    """
    Ask for one roommate with fuzzy completion.

    Args:
        roster: Names to choose from
        prompt: Label shown before the input

    Returns:
        Selected name, or None if the user skipped
    """
    if not roster:
        return None

    print("   Type to search, press Enter to confirm, Ctrl+C to skip\n")

    completer = RoommateCompleter(roster)
    session: PromptSession[str] = PromptSession(completer=completer)

    try:
        while True:
            result = session.prompt(f"{prompt}: ", complete_while_typing=True)

            if not result:
                return None

            if result in roster:
                logger.debug(f"User selected roommate: {result}")
                return result

            print("❌ Unknown roommate. Please select from the list or press Tab.")

    except KeyboardInterrupt:
        print("\n⏭️  Skipped")
        return None
    except EOFError:
        return None


def confirm(message: str) -> bool:
    """Simple yes/no confirmation, defaulting to no."""
    try:
        response = input(f"{message} [y/N] ").strip().lower()
    except (KeyboardInterrupt, EOFError):
        print()
        return False
    return response in ("y", "yes")
