"""
Error taxonomy and diagnostics for eslog
Every failure the pipeline can raise lives here, with source context formatting
"""

from dataclasses import dataclass
from typing import Optional
from pyparsing import ParseException


# ============================================================================
# SOURCE LOCATIONS
# ============================================================================

@dataclass(frozen=True)
class SourceSpan:
    """Source location of a statement"""
    filename: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int
    text: str = ""

    def __str__(self) -> str:
        if self.start_line == self.end_line:
            return f"{self.filename}:{self.start_line}:{self.start_col}-{self.end_col}"
        return f"{self.filename}:{self.start_line}:{self.start_col}-{self.end_line}:{self.end_col}"


def line_col_at(source_text: str, offset: int):
    """1-based (line, column) of an offset into the source"""
    line = source_text.count('\n', 0, offset) + 1
    line_start = source_text.rfind('\n', 0, offset) + 1
    return line, offset - line_start + 1


def span_for(source_text: str, start: int, end: int, filename: str = "<input>") -> SourceSpan:
    """Build the span covering source_text[start:end]"""
    start_line, start_col = line_col_at(source_text, start)
    end_line, end_col = line_col_at(source_text, end)
    return SourceSpan(filename, start_line, start_col, end_line, end_col, source_text[start:end])


def get_context_lines(source_text: str, line_num: int, col_num: int, context_lines: int = 1) -> str:
    """Get numbered context lines around an error with a caret under the column"""
    lines = source_text.split('\n')
    start_line = max(0, line_num - context_lines - 1)
    end_line = min(len(lines), line_num + context_lines)

    context_parts = []
    for i in range(start_line, end_line):
        line_prefix = f"{i+1:4d}: "
        context_parts.append(f"{line_prefix}{lines[i]}")
        if i == line_num - 1:
            context_parts.append(f"{'':6}{' ' * (col_num - 1)}^ here")

    return '\n'.join(context_parts)


# ============================================================================
# EXCEPTIONS
# ============================================================================

class EslogError(Exception):
    """Base class for every failure reported to the user"""
    kind = "Error"

    def __init__(self, message: str, span: Optional[SourceSpan] = None, context: str = ""):
        self.message = message
        self.span = span
        self.context = context
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        if self.span:
            result = f"{self.kind} at {self.span}: {self.message}"
            if self.context:
                result += f"\n{self.context}"
            return result
        return f"{self.kind}: {self.message}"


class MalformedStatementError(EslogError):
    """A statement is missing its '(' or ')' delimiter"""
    kind = "Malformed statement"


class InvalidSyntaxError(EslogError):
    """Tokens do not form a console.log call"""
    kind = "Invalid syntax"


class EslogRuntimeError(EslogError):
    """Failure while executing a statement"""
    kind = "Runtime error"


class DivisionByZeroError(EslogRuntimeError):
    """Integer division or modulo with a zero right operand"""
    kind = "Division by zero"


class ArithmeticOverflowError(EslogRuntimeError):
    """Exponentiation without a finite integer result"""
    kind = "Arithmetic overflow"


class InternalError(Exception):
    def __init__(self, msg: str):
        super().__init__(f"internal error: {msg}")


# ============================================================================
# PYPARSING BRIDGE
# ============================================================================

def enhance_parse_exception(exc: ParseException, statement: str, span: SourceSpan,
                            source_text: Optional[str] = None) -> MalformedStatementError:
    """Convert a pyparsing exception raised on a statement into a MalformedStatementError"""
    if '(' not in statement:
        message = "expected '(' after the callee"
    else:
        message = "expected ')' to close the argument list"

    # exc.loc is relative to the statement, shift it into the file
    line = span.start_line + statement.count('\n', 0, exc.loc)
    if line == span.start_line:
        col = span.start_col + exc.loc
    else:
        col = exc.loc - statement.rfind('\n', 0, exc.loc)

    context = get_context_lines(source_text, line, col) if source_text is not None else ""
    return MalformedStatementError(message, span, context)
