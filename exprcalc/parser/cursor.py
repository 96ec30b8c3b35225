"""
Character-level cursor over expression text.

The cursor tracks the current position and guards every lookup against
running past the end of the text: reads beyond the end return NULL_CHAR
instead of raising.
"""

from __future__ import annotations

from typing import Callable

NULL_CHAR = "\0"


class TextCursor:
    """
    Scans a string one character at a time.

    Example:
        >>> cursor = TextCursor("  abc+1")
        >>> cursor.skip_whitespace()
        >>> cursor.parse_while(str.isalpha)
        'abc'
        >>> cursor.peek()
        '+'
    """

    def __init__(self, text: str | None = None):
        self.text = ""
        self.index = 0
        self.reset(text)

    def reset(self, text: str | None = None) -> None:
        """
        Move back to the start of the text.

        Args:
            text: New text to scan (None keeps the current text)
        """
        if text is not None:
            self.text = text
        self.index = 0

    @property
    def end_of_text(self) -> bool:
        """True when the current position is at the end of the text."""
        return self.index >= len(self.text)

    def peek(self, ahead: int = 0) -> str:
        """
        Return the character ``ahead`` positions past the current one.

        Returns:
            The character, or NULL_CHAR beyond the end of the text
        """
        pos = self.index + ahead
        if 0 <= pos < len(self.text):
            return self.text[pos]
        return NULL_CHAR

    def move_ahead(self, count: int = 1) -> None:
        """Advance ``count`` characters, never past the end of the text."""
        self.index = min(self.index + count, len(self.text))

    def move_to(self, *chars: str) -> None:
        """Advance to the next occurrence of any of ``chars`` (or the end)."""
        while not self.end_of_text and self.text[self.index] not in chars:
            self.index += 1

    def extract(self, start: int, end: int | None = None) -> str:
        """Return text from ``start`` up to ``end`` (default: end of text)."""
        return self.text[start:end]

    def skip_whitespace(self) -> None:
        while not self.end_of_text and self.text[self.index].isspace():
            self.index += 1

    def skip_while(self, predicate: Callable[[str], bool]) -> None:
        while not self.end_of_text and predicate(self.text[self.index]):
            self.index += 1

    def parse_while(self, predicate: Callable[[str], bool]) -> str:
        """
        Consume characters while ``predicate`` holds.

        Returns:
            The consumed characters
        """
        start = self.index
        self.skip_while(predicate)
        return self.extract(start, self.index)

    def parse_quoted_text(self) -> tuple[str, bool]:
        """
        Consume a quoted literal starting at the current character.

        The current character is taken as the delimiter. Two consecutive
        delimiters inside the literal stand for one literal delimiter. The
        delimiters themselves are not included in the result.

        Returns:
            Tuple of (literal text, whether a closing delimiter was found).
            An unterminated literal runs to the end of the text.
        """
        quote = self.peek()
        self.move_ahead()

        parts: list[str] = []
        while not self.end_of_text:
            start = self.index
            self.move_to(quote)
            parts.append(self.extract(start, self.index))
            if self.end_of_text:
                break
            # Skip the delimiter
            self.move_ahead()
            if self.peek() == quote:
                parts.append(quote)
                self.move_ahead()
            else:
                return "".join(parts), True
        return "".join(parts), False
