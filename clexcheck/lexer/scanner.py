"""Scanner: segments source text into positioned lexemes."""

from collections.abc import Iterator

from clexcheck.lexer.tables import LanguageTables
from clexcheck.lexer.tokens import CommentStyle, Lexeme
from clexcheck.text import Position

_WHITESPACE = frozenset(" \t\v\f\r\n")


class Scanner:
    """Single-pass scanner that never fails on malformed input.

    Whitespace separates lexemes and is dropped. Comments are emitted as
    lexemes tagged with their `CommentStyle`; everything the scanner cannot
    place becomes a one-character lexeme for the classifier to mark Unknown.
    """

    def __init__(self, source: str, tables: LanguageTables | None = None) -> None:
        self._source = source
        self._tables = tables if tables is not None else LanguageTables.default()
        self._position = 0
        self._line = 1
        self._column = 1
        self._namespace_pending = False

    @property
    def source(self) -> str:
        """Text being scanned."""
        return self._source

    @property
    def position(self) -> Position:
        return Position(self._position, self._line, self._column)

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    def next_lexeme(self) -> Lexeme | None:
        """Scan the next lexeme, or return None once the source is exhausted.

        The rest of a `package` or `import` line is one lexeme holding the
        qualified name (`com.example.app`, `java.util.*`).
        """
        if self._namespace_pending:
            self._namespace_pending = False
            if self._starts_qualified_name():
                start = self.position
                self._lex_qualified_name()
                return Lexeme(text=self._source[start.offset : self._position], start=start, end=self.position)

        self._skip_whitespace()
        if self.is_eof:
            return None

        start = self.position
        style = self._lex_lexeme()
        lexeme = Lexeme(
            text=self._source[start.offset : self._position],
            start=start,
            end=self.position,
            comment_style=style,
        )
        self._namespace_pending = style is None and lexeme.text in self._tables.namespace_keywords
        return lexeme

    def __iter__(self) -> Iterator[Lexeme]:
        while True:
            lexeme = self.next_lexeme()
            if lexeme is None:
                return
            yield lexeme

    def _lex_lexeme(self) -> CommentStyle | None:
        ch = self._current_char()

        if ch == "/" and self._peek_char() == "/":
            self._lex_line_comment()
            return CommentStyle.LINE_COMMENT
        if ch == "/" and self._peek_char() == "*":
            self._lex_block_comment()
            return CommentStyle.BLOCK_COMMENT

        if ch == '"':
            self._lex_quoted('"')
        elif ch == "'":
            self._lex_quoted("'")
        elif ch.isdigit():
            self._lex_number()
        elif ch.isalpha() or ch == "_":
            self._lex_identifier()
        else:
            self._lex_symbol()
        return None

    def _lex_line_comment(self) -> None:
        # Consume until end of line, do not consume the newline itself.
        self._advance(2)
        while not self.is_eof and not self._at_line_end():
            self._advance(1)

    def _lex_block_comment(self) -> None:
        self._advance(2)
        while not self.is_eof:
            if self._current_char() == "*" and self._peek_char() == "/":
                self._advance(2)
                return
            self._advance(1)

    def _lex_quoted(self, quote: str) -> None:
        # Unterminated literals close at end of line.
        self._advance(1)
        while not self.is_eof:
            ch = self._current_char()
            if ch == quote:
                self._advance(1)
                return
            if self._at_line_end():
                return
            if ch == "\\":
                self._advance(1)
                if not self.is_eof and not self._at_line_end():
                    self._advance(1)
                continue
            self._advance(1)

    def _lex_number(self) -> None:
        saw_dot = False
        while not self.is_eof:
            ch = self._current_char()
            if ch.isdigit():
                self._advance(1)
                continue
            if ch == "." and not saw_dot and self._peek_char().isdigit():
                saw_dot = True
                self._advance(1)
                continue
            break
        # Suffix letters (`10L`, `2.5f`, `5abc`) stay attached; the classifier judges them.
        while not self.is_eof and self._is_word_char(self._current_char()):
            self._advance(1)

    def _lex_identifier(self) -> None:
        self._advance(1)
        while not self.is_eof and self._is_word_char(self._current_char()):
            self._advance(1)

    def _lex_symbol(self) -> None:
        # Longest match first, so `<=` wins over `<` `=`; `<>` has no rule and splits.
        remaining = len(self._source) - self._position
        for length in range(min(self._tables.max_symbol_length, remaining), 1, -1):
            if self._source[self._position : self._position + length] in self._tables.symbols:
                self._advance(length)
                return
        self._advance(1)

    def _lex_qualified_name(self) -> None:
        # Up to `;`, a comment or the end of the line, without trailing blanks.
        end = last = self._position
        while end < len(self._source) and self._source[end] not in "\r\n;":
            if self._source.startswith(("//", "/*"), end):
                break
            end += 1
            if not self._source[end - 1].isspace():
                last = end
        self._advance(last - self._position)

    def _starts_qualified_name(self) -> bool:
        while not self.is_eof and self._current_char() in " \t":
            self._advance(1)
        if self.is_eof or self._at_line_end() or self._current_char() == ";":
            return False
        return not self._source.startswith(("//", "/*"), self._position)

    def _skip_whitespace(self) -> None:
        while not self.is_eof and self._current_char() in _WHITESPACE:
            self._advance(1)

    def _at_line_end(self) -> bool:
        ch = self._current_char()
        return ch == "\n" or ch == "\r"

    @staticmethod
    def _is_word_char(ch: str) -> bool:
        return ch.isalnum() or ch == "_"

    def _current_char(self) -> str:
        if self.is_eof:
            return "\0"
        return self._source[self._position]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= len(self._source):
            return "\0"
        return self._source[index]

    def _advance(self, steps: int) -> None:
        for _ in range(steps):
            ch = self._source[self._position]
            self._position += 1
            if ch == "\n" or (ch == "\r" and self._current_char() != "\n"):
                self._line += 1
                self._column = 1
            else:
                self._column += 1


def scan(source_text: str, tables: LanguageTables | None = None) -> Iterator[Lexeme]:
    """Lazily scan `source_text`; iterate again to rescan from the start."""
    yield from Scanner(source_text, tables)
