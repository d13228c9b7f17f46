"""
eslog Interpreter
Executes LogCall trees to text and hands each line to an output sink
Node execution is a pure function; the sink is the only side effect
"""

from typing import Callable, List, Optional
import pykka

from error_handling import InternalError
from lexing import create_lexer
from parsing import BinaryOp, IntLiteral, LogCall, Node, StringLiteral, create_parser
from stdlib import OPERATORS, collecting_sink, eslog_println


Sink = Callable[[str], None]


# ============================================================================
# NODE EXECUTION
# ============================================================================

def execute(node: Node, debug: bool = False) -> str:
  """
  Reduce a node to its text.
  Every node class is handled here; anything else is an interpreter bug.
  """
  if debug:
    print(f"Evaluating: {type(node).__name__}")

  if isinstance(node, (StringLiteral, IntLiteral)):
    return node.value
  elif isinstance(node, BinaryOp):
    return execute_binary_op(node, debug)
  elif isinstance(node, LogCall):
    return " ".join(execute(arg, debug) for arg in node.arguments)
  else:
    raise InternalError(f"cannot execute node of type {type(node).__name__}")


def execute_binary_op(node: BinaryOp, debug: bool = False) -> str:
  """Apply the operator to both operands' text"""
  left = execute(node.left, debug)
  right = execute(node.right, debug)
  return OPERATORS[node.operator.name](left, right)


# ============================================================================
# PARALLEL EXECUTION (Using Pykka)
# ============================================================================

class StatementWorker(pykka.ThreadingActor):
  """Actor that executes statements it is asked about"""

  def __init__(self, debug: bool = False):
    super().__init__()
    self.debug = debug

  def on_receive(self, message):
    # exceptions travel back to the asker through the future
    return execute(message, self.debug)


class WorkerPool:
  """Fixed set of statement workers, stopped together"""

  def __init__(self, size: int, debug: bool = False):
    self.workers: List[pykka.ActorRef] = [
        StatementWorker.start(debug) for _ in range(size)]

  def submit(self, nodes: List[LogCall]) -> List[pykka.Future]:
    """Ask workers round-robin, futures come back in program order"""
    return [
        self.workers[i % len(self.workers)].ask(node, block=False)
        for i, node in enumerate(nodes)
    ]

  def terminate_all(self):
    for worker in self.workers:
      worker.stop()
    self.workers = []


# ============================================================================
# PROGRAM EVALUATION
# ============================================================================

def evaluate(nodes: List[LogCall], sink: Sink = eslog_println,
             jobs: int = 1, debug: bool = False) -> None:
  """
  Execute statements in program order, passing each line to sink.
  A failing statement stops the run; earlier lines have already been emitted.
  """
  if jobs > 1 and len(nodes) > 1:
    evaluate_parallel(nodes, sink, jobs, debug)
    return

  for node in nodes:
    sink(execute(node, debug))


def evaluate_parallel(nodes: List[LogCall], sink: Sink, jobs: int,
                      debug: bool = False) -> None:
  """Execute statements on a worker pool, emitting lines in program order"""
  pool = WorkerPool(min(jobs, len(nodes)), debug)
  try:
    for future in pool.submit(nodes):
      sink(future.get())
  finally:
    pool.terminate_all()


def run_source(source: str, filename: str = "<input>", jobs: int = 1,
               debug: bool = False) -> List[str]:
  """Lex, parse and evaluate source, returning the output lines"""
  tokens = create_lexer(filename, debug).lex(source)
  nodes = create_parser(debug).parse(tokens)
  lines: List[str] = []
  evaluate(nodes, collecting_sink(lines), jobs, debug)
  return lines


# ============================================================================
# FACTORY FUNCTIONS
# ============================================================================

class EslogInterpreter:
  """Evaluator bound to an output sink"""

  def __init__(self, sink: Optional[Sink] = None, jobs: int = 1, debug: bool = False):
    self.sink = sink or eslog_println
    self.jobs = jobs
    self.debug = debug

  def interpret_program(self, nodes: List[LogCall]) -> None:
    if self.debug:
      print(f"Evaluating {len(nodes)} statements with {self.jobs} job(s)")
    evaluate(nodes, self.sink, self.jobs, self.debug)

  def execute(self, node: Node) -> str:
    return execute(node, self.debug)


def create_interpreter(sink: Optional[Sink] = None, jobs: int = 1,
                       debug: bool = False) -> EslogInterpreter:
  """Create an interpreter writing to sink (stdout by default)"""
  return EslogInterpreter(sink, jobs, debug)


def create_debug_interpreter(sink: Optional[Sink] = None, jobs: int = 1) -> EslogInterpreter:
  """Create an interpreter with debug enabled"""
  return EslogInterpreter(sink, jobs, debug=True)
