from .errors import InvalidHeader, UnexpectedEof

COMMENT = "%"
BANNER = "%%matrixmarket"


def is_banner(text):
    return text[:len(BANNER)].lower() == BANNER


class LineReader:
    """Logical lines of a Matrix Market source.

    Blank lines and ``%`` comment lines are skipped; ``lineno`` is the
    1-based physical number of the last line consumed.
    """

    def __init__(self, lines):
        self._lines = iter(lines)
        self.lineno = 0

    def _stripped(self):
        for raw in self._lines:
            self.lineno += 1
            text = raw.strip()
            if text:
                yield text

    def banner(self):
        """Return ``(lineno, text)`` of the banner line."""
        for text in self._stripped():
            if is_banner(text):
                return self.lineno, text
            if text.startswith(COMMENT):
                continue
            raise InvalidHeader(
                "expected '%%MatrixMarket' banner", self.lineno, text.split()[0]
            )
        raise UnexpectedEof("input is empty (or contains only comments)", self.lineno)

    def __iter__(self):
        for text in self._stripped():
            if not text.startswith(COMMENT):
                yield self.lineno, text.split()

    def next_line(self, what):
        """Return ``(lineno, tokens)`` of the next logical line."""
        for item in self:
            return item
        raise UnexpectedEof(f"expected {what}", self.lineno)

    def tokens(self):
        """Yield ``(lineno, token)`` for every remaining token."""
        for lineno, tokens in self:
            for token in tokens:
                yield lineno, token
