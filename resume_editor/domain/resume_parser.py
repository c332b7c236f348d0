"""Segment plain-text resumes into a canonical section map.

All functions operate on content strings -- no file I/O.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .headers import CONTACT, is_separator_line, resolve_header

SectionMap = Dict[str, str]


def parse_sections(text: str) -> SectionMap:
    """Split *text* into ``{canonical section name: content}``.

    Lines before the first header go to ``Contact``.  Every content line ends
    up in exactly one section; header lines and the separator row under a
    header are consumed.  Aliases of the same section are merged into a
    single key that keeps its first-seen position.
    """
    lines = [line.strip() for line in text.split("\n") if line.strip()]
    buffers: Dict[str, List[str]] = {}
    current: Optional[str] = None
    preamble: List[str] = []

    i = 0
    while i < len(lines):
        line = lines[i]
        underlined = i + 1 < len(lines) and is_separator_line(lines[i + 1])
        resolved = None if is_separator_line(line) else resolve_header(line, underlined=underlined)

        if resolved is None:
            target = preamble if current is None else buffers[current]
            target.append(line)
            i += 1
            continue

        name, inline = resolved
        current = name
        buffers.setdefault(name, [])
        if inline:
            buffers[name].append(inline)
        i += 2 if underlined else 1

    sections: SectionMap = {}
    if preamble:
        sections[CONTACT] = "\n".join(preamble)
    for name, buf in buffers.items():
        sections[name] = "\n".join(buf)
    return sections


def section_lines(sections: SectionMap, name: str) -> List[str]:
    """Content lines of one section, empty when the section is absent."""
    content = sections.get(name, "")
    return [line for line in content.split("\n") if line]
