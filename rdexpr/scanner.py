"""Anchored regex scanner.

The scanner has no token stream of its own. The parser asks it whether a
given pattern matches exactly at the cursor, and the scanner either consumes
the match (plus any whitespace after it) or leaves the cursor where it was.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

WHITESPACE = re.compile(r'\s+')


class Scanner:
    def __init__(self, text: str, trace: Optional[Callable[[str], None]] = None):
        self.text = text
        self.pos = 0
        self.trace = trace
        self.skip_whitespace()

    def skip_whitespace(self) -> None:
        m = WHITESPACE.match(self.text, self.pos)
        if m:
            self.pos = m.end()

    def accept(self, pattern: re.Pattern) -> Optional[str]:
        """Match `pattern` at the cursor.

        `Pattern.match` with a start offset is anchored at that offset, so a
        failure here never searches further into the text. On success the
        cursor moves past the match and the following whitespace.
        """
        m = pattern.match(self.text, self.pos)
        if m is None:
            return None
        start = self.pos
        self.pos = m.end()
        self.skip_whitespace()
        if self.trace is not None:
            self.trace(f"accept {m.group()!r} @ {start}")
        return m.group()

    def remaining(self) -> str:
        if self.pos < len(self.text):
            return self.text[self.pos:]
        return ''
