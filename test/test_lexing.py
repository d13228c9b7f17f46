"""
Lexer tests for eslog
Statement splitting, argument classification and malformed statements
"""

import pytest
from lexing import Token, TokenKind, create_lexer, format_token, lex
from error_handling import MalformedStatementError


def kinds(tokens):
  return [token.kind for token in tokens]


def literals(tokens):
  return [token.literal for token in tokens]


class TestStatements:
  """Test how source is cut into statements"""

  @pytest.fixture
  def lexer(self):
    """Provide a fresh lexer for each test"""
    return create_lexer("test.es")

  def test_string_arguments(self, lexer):
    """Test a call with two string literals"""
    tokens = lexer.lex('console.log("a","b");')
    assert tokens == [
        Token(TokenKind.CONSOLE, "console"),
        Token(TokenKind.LOG, "log"),
        Token(TokenKind.STRING, "a"),
        Token(TokenKind.STRING, "b"),
    ]

  def test_multiple_statements(self, lexer):
    """Test statements are lexed in order"""
    tokens = lexer.lex("console.log(1);\n  console.log(2);")
    assert literals(tokens) == ["console", "log", "1", "console", "log", "2"]

  def test_empty_segments_are_skipped(self, lexer):
    """Test blank text between separators produces nothing"""
    assert lexer.lex(" ;;\n ; ") == []
    assert lexer.lex("") == []

  def test_missing_final_separator(self, lexer):
    """Test the last statement does not need a ';'"""
    tokens = lexer.lex("console.log(1)\n")
    assert kinds(tokens) == [TokenKind.CONSOLE, TokenKind.LOG, TokenKind.INT]

  def test_unknown_callee_words_are_dropped(self, lexer):
    """Test only 'console' and 'log' produce tokens"""
    tokens = lexer.lex("window.console.log(1)")
    assert kinds(tokens) == [TokenKind.CONSOLE, TokenKind.LOG, TokenKind.INT]

  def test_callee_split_on_spaces(self, lexer):
    """Test spaces separate callee words like dots do"""
    tokens = lexer.lex("console log (1)")
    assert kinds(tokens) == [TokenKind.CONSOLE, TokenKind.LOG, TokenKind.INT]

  def test_text_after_last_paren_is_ignored(self, lexer):
    """Test trailing text after ')' is dropped"""
    tokens = lexer.lex("console.log(1) trailing")
    assert literals(tokens) == ["console", "log", "1"]

  def test_arguments_run_to_last_paren(self, lexer):
    """Test the argument text ends at the last ')'"""
    tokens = lexer.lex('console.log("(x)")')
    assert tokens[2] == Token(TokenKind.STRING, "(x)")

  def test_empty_argument_list(self, lexer):
    """Test an empty call yields one empty INT"""
    tokens = lexer.lex("console.log()")
    assert tokens[2:] == [Token(TokenKind.INT, "")]


class TestArguments:
  """Test argument classification"""

  def test_string_quotes_are_stripped(self):
    """Test the string literal keeps its body verbatim"""
    tokens = lex(r'console.log("  a\nb ")')
    assert tokens[2] == Token(TokenKind.STRING, r"  a\nb ")

  def test_string_with_operator_stays_string(self):
    """Test quoting wins over operator detection"""
    tokens = lex('console.log("1+2")')
    assert tokens[2:] == [Token(TokenKind.STRING, "1+2")]

  def test_lone_quote_is_empty_string(self):
    """Test a single '"' both starts and ends the literal"""
    tokens = lex('console.log(")')
    assert tokens[2:] == [Token(TokenKind.STRING, "")]

  def test_tabs_are_kept(self):
    """Test tabs inside strings are not expanded"""
    tokens = lex('console.log("a\tb")')
    assert tokens[2].literal == "a\tb"

  @pytest.mark.parametrize("symbol,kind", [
      ("+", TokenKind.PLUS),
      ("-", TokenKind.MINUS),
      ("*", TokenKind.MULTIPLY),
      ("/", TokenKind.DIVIDE),
      ("%", TokenKind.MODULO),
      ("^", TokenKind.POWER),
  ])
  def test_operators(self, symbol, kind):
    """Test every operator character maps to its token"""
    tokens = lex(f"console.log( 6 {symbol} 3 )")
    assert tokens[2:] == [
        Token(TokenKind.INT, "6"),
        Token(kind, symbol),
        Token(TokenKind.INT, "3"),
    ]

  def test_only_first_operator_is_split(self):
    """Test later operator characters stay in the right operand"""
    tokens = lex("console.log(1+2*3)")
    assert literals(tokens[2:]) == ["1", "+", "2*3"]

  def test_leading_minus_gives_empty_left_operand(self):
    """Test a negative numeral is lexed as a subtraction"""
    tokens = lex("console.log(-5)")
    assert tokens[2:] == [
        Token(TokenKind.INT, ""),
        Token(TokenKind.MINUS, "-"),
        Token(TokenKind.INT, "5"),
    ]

  def test_plain_argument_is_int(self):
    """Test arguments without operators become INT tokens unvalidated"""
    tokens = lex("console.log( abc , 42 )")
    assert tokens[2:] == [Token(TokenKind.INT, "abc"), Token(TokenKind.INT, "42")]


class TestMalformedStatements:
  """Test statements missing their delimiters"""

  def test_missing_open_paren(self):
    """Test a statement without '(' is rejected"""
    with pytest.raises(MalformedStatementError) as exc_info:
      lex("console.log 1")
    assert "'('" in exc_info.value.message

  def test_missing_close_paren(self):
    """Test a statement without ')' is rejected"""
    with pytest.raises(MalformedStatementError) as exc_info:
      lex("console.log(1")
    assert "')'" in exc_info.value.message

  def test_close_before_open(self):
    """Test a ')' only before the '(' does not count"""
    with pytest.raises(MalformedStatementError):
      lex(")console.log(")

  def test_error_points_at_statement(self):
    """Test the span locates the offending statement"""
    source = "console.log(1);\n  console.log 2;"
    with pytest.raises(MalformedStatementError) as exc_info:
      lex(source, "prog.es")
    span = exc_info.value.span
    assert span.filename == "prog.es"
    assert (span.start_line, span.start_col) == (2, 3)
    assert span.text == "console.log 2"
    assert "prog.es:2:3" in str(exc_info.value)
    assert "   2:   console.log 2" in str(exc_info.value)
    assert "^ here" in str(exc_info.value)

  def test_lexing_stops_at_first_bad_statement(self):
    """Test no tokens come back when any statement is malformed"""
    with pytest.raises(MalformedStatementError):
      lex("console.log(1); oops; console.log(2);")


class TestTokens:
  """Test token values"""

  def test_tokens_are_immutable(self):
    token = Token(TokenKind.INT, "1")
    with pytest.raises(AttributeError):
      token.literal = "2"

  def test_span_is_ignored_by_equality(self):
    tokens = lex("console.log(1)", "a.es")
    assert tokens[0].span is not None
    assert tokens[0] == Token(TokenKind.CONSOLE, "console")

  def test_every_token_carries_its_statement_span(self):
    tokens = lex("console.log(1);\nconsole.log(2);")
    assert [t.span.start_line for t in tokens] == [1, 1, 1, 2, 2, 2]

  def test_format_token(self):
    token = Token(TokenKind.PLUS, "+")
    assert format_token(token) == "Type: PLUS, Literal: +"


class TestDebugLexer:
  """Test the tracing lexer"""

  def test_traces_statements(self, capsys):
    from lexing import create_debug_lexer
    tokens = create_debug_lexer().lex("console.log(1); console.log(2)")
    out = capsys.readouterr().out
    assert "Lexing statement: 'console.log(1)'" in out
    assert "Lexed 6 tokens" in out
    assert len(tokens) == 6
