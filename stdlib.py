"""
eslog Standard Library
The integer operators a BinaryOp can apply and the default output sink
All operators take and return numeral text
"""

from typing import Callable, Dict, List
import math
import operator
from utilities import (
  binary_int_op,
  coerce_int,
  trunc_div,
  trunc_mod,
)
from error_handling import DivisionByZeroError, ArithmeticOverflowError


# ============================================================================
# OUTPUT
# ============================================================================

def eslog_println(line: str) -> None:
  """Default sink: print a line to stdout"""
  print(line)


def collecting_sink(lines: List[str]) -> Callable[[str], None]:
  """Sink appending every line to the given list"""
  return lines.append


# ============================================================================
# ARITHMETIC
# ============================================================================

eslog_add = binary_int_op(operator.add)
eslog_sub = binary_int_op(operator.sub)
eslog_mul = binary_int_op(operator.mul)


def eslog_div(x: str, y: str) -> str:
  """Division, truncated toward zero"""
  left, right = coerce_int(x), coerce_int(y)
  if right == 0:
    raise DivisionByZeroError(f"cannot divide {left} by zero")
  return str(trunc_div(left, right))


def eslog_mod(x: str, y: str) -> str:
  """Modulo, sign follows the dividend"""
  left, right = coerce_int(x), coerce_int(y)
  if right == 0:
    raise DivisionByZeroError(f"cannot compute {left} modulo zero")
  return str(trunc_mod(left, right))


def eslog_pow(x: str, y: str) -> str:
  """Real-valued power truncated toward zero"""
  left, right = coerce_int(x), coerce_int(y)
  try:
    result = math.pow(left, right)
  except (OverflowError, ValueError):
    # math.pow raises instead of returning inf, e.g. 0 ^ -1 or 10 ^ 400
    raise ArithmeticOverflowError(f"{left} ^ {right} has no finite result")
  if not math.isfinite(result):
    raise ArithmeticOverflowError(f"{left} ^ {right} has no finite result")
  return str(int(result))


# Keyed by parsing.Operator names
OPERATORS: Dict[str, Callable[[str, str], str]] = {
  'ADD': eslog_add,
  'SUB': eslog_sub,
  'MUL': eslog_mul,
  'DIV': eslog_div,
  'MOD': eslog_mod,
  'POW': eslog_pow,
}
