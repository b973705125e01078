"""Answer validation and scoring for bomb party turns."""

from typing import AbstractSet


def normalize_answer(text: str) -> str:
    """Strip surrounding whitespace and case-fold an answer."""
    return text.strip().casefold()


def is_valid_answer(answer: str, objective: str, dictionary: AbstractSet[str]) -> bool:
    """
    Check whether an answer satisfies an objective.

    Args:
        answer: Raw message content sent by the player
        objective: Letter sequence the word must contain
        dictionary: Set of valid, case-folded words

    Returns:
        True if the answer contains the objective and is a real word
    """
    word = normalize_answer(answer)
    if objective.casefold() not in word:
        return False
    return word in dictionary


def calculate_score(answer: str, objective: str) -> int:
    """
    Calculate points for a valid answer.

    Longer words built around the same objective score more: one point for
    the objective itself plus one per extra letter.
    """
    return len(normalize_answer(answer)) - len(objective) + 1
