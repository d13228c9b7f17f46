"""
eslog Lexer
Turns source text into a flat list of typed tokens, one statement at a time
Statements are recognized by their textual shape, not by a general tokenizer grammar
"""

from typing import List, Optional
from dataclasses import dataclass, field
from enum import Enum
import re

from pyparsing import ParseException, Regex, Suppress

from error_handling import SourceSpan, enhance_parse_exception, span_for


class TokenKind(Enum):
    CONSOLE = "CONSOLE"
    LOG = "LOG"
    STRING = "STRING"
    INT = "INT"
    PLUS = "PLUS"
    MINUS = "MINUS"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"
    MODULO = "MODULO"
    POWER = "POWER"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Token:
    """Token kind and the exact text it was made from"""
    kind: TokenKind
    literal: str
    span: Optional[SourceSpan] = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"{self.kind}({self.literal!r})"


KEYWORDS = {
    "console": TokenKind.CONSOLE,
    "log": TokenKind.LOG,
}

OPERATOR_CHARS = "+-*%/^"

OPERATOR_KINDS = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.MULTIPLY,
    "/": TokenKind.DIVIDE,
    "%": TokenKind.MODULO,
    "^": TokenKind.POWER,
}


class EslogGrammar:
    """pyparsing elements describing the pieces of a statement"""

    def __init__(self):
        self._setup_grammar()

    def _setup_grammar(self):
        # callee is everything before the first '(', arguments run to the last ')'
        callee = Regex(r"[^(]*")("callee")
        arguments = Regex(r".*(?=\))", flags=re.DOTALL)("arguments")
        self.statement = (
            callee + Suppress("(") + arguments + Suppress(")")
        ).leave_whitespace().parse_with_tabs()

        # left operand stops at the first operator character, the rest is verbatim
        self.binary_argument = Regex(
            r"(?P<left>[^+\-*%/^]*)(?P<operator>[+\-*%/^])(?P<right>.*)",
            flags=re.DOTALL,
        ).leave_whitespace().parse_with_tabs()

        self.callee_word_separator = re.compile(r"[ .]")


class EslogLexer:
    """Splits source into statements and tokenizes each one"""

    def __init__(self, filename: str = "<input>", debug: bool = False):
        self.filename = filename
        self.debug = debug
        self.grammar = EslogGrammar()

    def lex(self, source: str) -> List[Token]:
        """Tokenize a whole program"""
        tokens: List[Token] = []
        offset = 0
        for segment in source.split(";"):
            stripped = segment.strip()
            if stripped:
                start = offset + (len(segment) - len(segment.lstrip()))
                span = span_for(source, start, start + len(stripped), self.filename)
                tokens.extend(self.lex_statement(stripped, span, source))
            offset += len(segment) + 1

        if self.debug:
            print(f"Lexed {len(tokens)} tokens")
        return tokens

    def lex_statement(self, statement: str, span: Optional[SourceSpan] = None,
                      source: Optional[str] = None) -> List[Token]:
        """Tokenize one trimmed statement"""
        if self.debug:
            print(f"Lexing statement: {statement!r}")

        try:
            shape = self.grammar.statement.parse_string(statement)
        except ParseException as e:
            if span is None:
                span = span_for(statement, 0, len(statement), self.filename)
                source = statement
            raise enhance_parse_exception(e, statement, span, source) from e

        tokens: List[Token] = []
        for word in self.grammar.callee_word_separator.split(shape.get("callee", "")):
            if word in KEYWORDS:
                tokens.append(Token(KEYWORDS[word], word, span))

        for argument in shape.get("arguments", "").split(","):
            tokens.extend(self._lex_argument(argument.strip(), span))

        return tokens

    def _lex_argument(self, argument: str, span: Optional[SourceSpan]) -> List[Token]:
        if argument.startswith('"') and argument.endswith('"'):
            return [Token(TokenKind.STRING, argument[1:-1], span)]

        if any(c in OPERATOR_CHARS for c in argument):
            parts = self.grammar.binary_argument.parse_string(argument)
            symbol = parts["operator"]
            return [
                Token(TokenKind.INT, parts.get("left", "").strip(), span),
                Token(OPERATOR_KINDS[symbol], symbol, span),
                Token(TokenKind.INT, parts.get("right", "").strip(), span),
            ]

        return [Token(TokenKind.INT, argument, span)]


# Factory functions for creating lexers
def create_lexer(filename: str = "<input>", debug: bool = False) -> EslogLexer:
    """Create an eslog lexer"""
    return EslogLexer(filename, debug=debug)


def create_debug_lexer(filename: str = "<input>") -> EslogLexer:
    """Create an eslog lexer with debug enabled"""
    return EslogLexer(filename, debug=True)


def lex(source: str, filename: str = "<input>") -> List[Token]:
    """Tokenize source text"""
    return create_lexer(filename).lex(source)


def format_token(token: Token) -> str:
    """One line of the token dump"""
    return f"Type: {token.kind}, Literal: {token.literal}"
