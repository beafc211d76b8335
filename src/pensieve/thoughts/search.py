"""Client-side search over committed thoughts."""

from .models import TimestampedThought


def matches(thought: TimestampedThought, term: str) -> bool:
    """Case-insensitive substring match; an empty term matches everything."""
    if not term:
        return True
    return term.casefold() in thought.thought.casefold()


def filter_history(
    history: list[TimestampedThought],
    term: str
) -> list[TimestampedThought]:
    """Return the thoughts containing ``term``, in their original order.

    Args:
        history: Thoughts, newest first
        term: Search term; empty returns the full history

    Returns:
        Matching subsequence of ``history``
    """
    if not term:
        return list(history)
    return [thought for thought in history if matches(thought, term)]
