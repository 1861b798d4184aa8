"""Insert, replace and remove the gogitignore-managed block of a .gitignore."""

from __future__ import annotations

from .core import MalformedBlockError

NAME = "gogitignore"
START_MARKER = f"\n# {NAME} start\n"
END_MARKER = f"# {NAME} end\n"


def wrap(body: str) -> str:
    """Return *body* framed by the start and end markers."""
    if not body.endswith("\n"):
        body += "\n"
    return START_MARKER + body + END_MARKER


def _locate(text: str) -> tuple[int, int] | None:
    """Return ``(start, end)`` of the block in *text*, or None when absent.

    *end* is the index just past the end marker.
    """
    starts = text.count(START_MARKER)
    if starts > 1:
        raise MalformedBlockError("multiple instances of start marker")
    ends = text.count(END_MARKER)
    if starts == 0:
        if ends:
            raise MalformedBlockError("end marker without start marker")
        return None
    if ends == 0:
        raise MalformedBlockError("found no end marker")
    if ends > 1:
        raise MalformedBlockError("multiple instances of end marker")

    start = text.index(START_MARKER)
    end = text.index(END_MARKER)
    if end < start + len(START_MARKER):
        raise MalformedBlockError("end marker precedes start marker")
    return start, end + len(END_MARKER)


def insert(text: str, addition: str) -> str:
    """Put *addition* into the managed block of *text*.

    An existing block is replaced, otherwise a new one is appended.
    An empty *addition* leaves *text* untouched.
    """
    if not addition:
        return text

    block = wrap(addition)
    if not text:
        return block

    span = _locate(text)
    if not text.endswith("\n"):
        text += "\n"
    if span is None:
        return text + block

    start, end = span
    return text[:start] + block + text[end:]


def clean(text: str) -> str:
    """Remove the managed block from *text*.

    A blank line left on either side of the block is collapsed by one
    newline.
    """
    if not text or START_MARKER not in text:
        return text

    span = _locate(text)
    if span is None:
        return text
    start, end = span

    if start >= 2 and text[start - 2:start] == "\n\n":
        start -= 1
    if text[end:end + 2] == "\n\n":
        end += 1

    return text[:start] + text[end:]
