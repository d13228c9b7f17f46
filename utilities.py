"""
Utilities module for eslog
Numeral coercion and integer helpers shared by the evaluator and stdlib
"""

from typing import Callable
import re

from error_handling import ArithmeticOverflowError


_NUMERAL = re.compile(r'[+-]?[0-9]+')

# Longest decimal text accepted as an operand or produced as a result
MAX_NUMERAL_DIGITS = 4300
_NUMERAL_LIMIT = 10 ** MAX_NUMERAL_DIGITS


# ==================== NUMERAL COERCION ====================

def coerce_int(text: str) -> int:
  """
  Best-effort conversion of numeral text to an int

  Text that is not a base-10 integer (optional sign, ASCII digits only)
  coerces to 0, as does a numeral with more than MAX_NUMERAL_DIGITS
  significant digits. Malformed operands degrade the result instead of
  failing the run.

  Examples:
    coerce_int("42") -> 42
    coerce_int("-7") -> -7
    coerce_int("x") -> 0
    coerce_int("") -> 0
  """
  if not _NUMERAL.fullmatch(text):
    return 0
  sign = '-' if text.startswith('-') else ''
  digits = text.lstrip('+-').lstrip('0')
  if not digits or len(digits) > MAX_NUMERAL_DIGITS:
    return 0
  return int(sign + digits)


def format_int(value: int) -> str:
  """
  Numeral text of an operator result

  Raises ArithmeticOverflowError when the result needs more than
  MAX_NUMERAL_DIGITS digits.
  """
  if abs(value) >= _NUMERAL_LIMIT:
    raise ArithmeticOverflowError(
      f"result has more than {MAX_NUMERAL_DIGITS} digits")
  return str(value)


# ==================== TRUNCATING ARITHMETIC ====================

def trunc_div(x: int, y: int) -> int:
  """
  Integer quotient truncated toward zero

  Examples:
    trunc_div(7, 2) -> 3
    trunc_div(-7, 2) -> -3
  """
  q = abs(x) // abs(y)
  return q if (x < 0) == (y < 0) else -q


def trunc_mod(x: int, y: int) -> int:
  """
  Remainder matching trunc_div, sign follows the dividend

  Examples:
    trunc_mod(10, 3) -> 1
    trunc_mod(-7, 2) -> -1
  """
  return x - y * trunc_div(x, y)


def binary_int_op(op: Callable[[int, int], int]) -> Callable[[str, str], str]:
  """
  Lift an int operator to one over numeral text

  Examples:
    add = binary_int_op(operator.add)
    add("3", "4") -> "7"
  """
  def apply(x: str, y: str) -> str:
    return format_int(op(coerce_int(x), coerce_int(y)))

  return apply
