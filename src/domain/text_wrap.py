"""Character-budget line wrapping used by the PDF layout"""

from typing import Iterator, List


def _break_position(text: str, max_chars: int) -> int:
    """Length of the first line when text is longer than max_chars"""
    space = text.rfind(" ", 0, max_chars + 1)
    hyphen = text.rfind("-", 0, max_chars)
    # A hyphen stays at the end of its line, a space is dropped
    best = max(space, hyphen + 1 if hyphen >= 0 else -1)
    if best <= 0:
        return max_chars
    return best


def iter_wrapped(line: str, max_chars: int) -> Iterator[str]:
    """
    Split one logical line into chunks of at most max_chars characters

    Breaks at the rightmost space or hyphen within the budget and falls back
    to a hard break when neither exists.
    """
    if max_chars <= 0:
        raise ValueError("max_chars must be positive")

    remaining = line.strip()
    if not remaining:
        yield ""
        return

    while len(remaining) > max_chars:
        cut = _break_position(remaining, max_chars)
        yield remaining[:cut].rstrip()
        remaining = remaining[cut:].lstrip(" ")
    if remaining:
        yield remaining


def wrap_text(text: str, max_chars: int) -> List[str]:
    """Wrap every newline-separated logical line independently"""
    lines: List[str] = []
    for logical_line in (text or "").splitlines() or [""]:
        lines.extend(iter_wrapped(logical_line, max_chars))
    return lines


def truncate(text: str, max_chars: int) -> str:
    return text if len(text) <= max_chars else text[:max_chars]
