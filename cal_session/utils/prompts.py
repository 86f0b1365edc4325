"""Interactive prompting utilities for the cal-session CLI."""

import builtins
import sys
from typing import List, Optional


def is_interactive() -> bool:
    """Return True when prompts can safely read from stdin."""
    # If input() has been monkeypatched (e.g. during tests), assume interactivity.
    if input is not builtins.input:  # type: ignore[name-defined]
        return True

    stdin = getattr(sys, "stdin", None)
    if stdin is None:
        return False

    try:
        return stdin.isatty()
    except Exception:
        return False


def confirm(question: str, default: bool = False) -> bool:
    """Ask a yes/no question. Non-interactive sessions get ``default``."""
    if not is_interactive():
        return default

    suffix = "(Y/n)" if default else "(y/N)"
    response = input(f"{question} {suffix}: ").strip().lower()
    if not response:
        return default
    return response in ['y', 'yes']


def prompt_choice(question: str, choices: List[str], default: Optional[str] = None) -> str:
    """Ask until the answer's first letter is one of ``choices``."""
    while True:
        try:
            response = input(f"{question} ").strip().lower()
        except EOFError:
            response = ""

        if not response and default is not None:
            return default

        if response and response[0] in choices:
            return response[0]

        print(f"   Please answer with one of: {', '.join(choices)}")
