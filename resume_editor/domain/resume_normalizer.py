"""Idempotent whitespace and structure repair for plain-text resumes.

``normalize_resume(normalize_resume(t)) == normalize_resume(t)`` for every
string ``t``.  Steps run in a fixed order because later steps rely on the
shape produced by earlier ones.
"""

from __future__ import annotations

import re
from typing import List

from .headers import BULLET, find_header_tokens, is_isolated_header_line

_LINE_ENDINGS_RE = re.compile(r"\r\n?")
_HORIZONTAL_RUN_RE = re.compile(r"[^\S\n]{2,}")
_BLANK_RUN_RE = re.compile(r"\n(?:[^\S\n]*\n){3,}")
_TRAILING_WS_RE = re.compile(r"[^\S\n]+$", re.MULTILINE)
_BULLET_MARKER_RE = re.compile(r"^[^\S\n]*[-*][^\S\n]+", re.MULTILINE)


def normalize_resume(text: str) -> str:
    """Return *text* with spacing, header isolation and bullets repaired."""
    fixed = _LINE_ENDINGS_RE.sub("\n", text)
    fixed = _HORIZONTAL_RUN_RE.sub(" ", fixed)
    # At most two blank (or whitespace-only) lines in a row
    fixed = _BLANK_RUN_RE.sub("\n\n\n", fixed)
    fixed = _TRAILING_WS_RE.sub("", fixed)
    fixed = isolate_headers(fixed)
    fixed = _BULLET_MARKER_RE.sub(BULLET + " ", fixed)
    return fixed


def isolate_headers(text: str) -> str:
    """Split header tokens glued to other text onto their own line.

    A header that shares its line with other text is moved to its own line
    with exactly one blank line before and after it.  Lines that already hold
    only a header are left alone.
    """
    out: List[str] = []
    swallow_blanks = False

    for line in text.split("\n"):
        if swallow_blanks and not line.strip():
            continue
        swallow_blanks = False

        pieces = _split_line(line)
        if len(pieces) == 1:
            out.append(line)
            continue

        for piece in pieces:
            if piece is None:
                # Blank separator around a freshly isolated header
                while out and not out[-1].strip():
                    out.pop()
                if out:
                    out.append("")
                continue
            out.append(piece)
        if pieces[-1] is None:
            swallow_blanks = True

    return "\n".join(out)


def _split_line(line: str) -> List:
    """Break *line* into text pieces, with ``None`` marking a required blank line."""
    if is_isolated_header_line(line):
        return [line]

    matches = find_header_tokens(line)
    if not matches:
        return [line]

    first = matches[0]
    prefix = line[: first.start()].rstrip()
    suffix = line[first.end():].lstrip()
    if suffix.startswith(":"):
        suffix = suffix[1:].lstrip()

    pieces: List = []
    if prefix:
        pieces.append(prefix)
    pieces.extend([None, first.group(0), None])
    if suffix:
        pieces.extend(_split_line(suffix))
        if is_isolated_header_line(suffix):
            pieces.append(None)
    return pieces
