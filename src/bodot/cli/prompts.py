"""
Interactive questions for `bodot init`.
"""

from typing import Callable

from ..orchestration import BodotContext


def ask(context: BodotContext, question: str) -> str:
    """Ask one question and return the trimmed answer."""
    return context.prompt(f"{question}\n> ").strip()


def ask_until(
    context: BodotContext,
    question: str,
    error_message: str,
    is_valid: Callable[[str], bool],
) -> str:
    """Repeat a question until `is_valid` accepts the trimmed answer."""
    answer = ask(context, question)
    while not is_valid(answer):
        print(error_message)
        answer = ask(context, question)
    return answer
