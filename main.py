"""
eslog - Main Entry Point
Runs console.log scripts and dumps each pipeline stage along the way
"""

import sys
import argparse
from pathlib import Path
from typing import List, Optional
import os

# Readline support for history and auto-completion
try:
  import readline
  READLINE_AVAILABLE = True
except ImportError:
  READLINE_AVAILABLE = False

from error_handling import EslogError, EslogRuntimeError, InvalidSyntaxError, MalformedStatementError
from lexing import create_lexer, format_token, Token
from parsing import create_parser, pretty_print_ast, LogCall
from interpreter import create_interpreter

VERSION = "eslog v0.1.0"

SECTIONS = ("tokens", "ast", "output")


def create_arg_parser() -> argparse.ArgumentParser:
  """Create command line argument parser"""
  parser = argparse.ArgumentParser(
      prog='eslog',
      description='eslog - a tiny console.log interpreter',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  %(prog)s script.es              # Show tokens, AST and output
  %(prog)s -q script.es           # Only the program output
  %(prog)s --tokens script.es     # Only the token dump
  %(prog)s --ast script.es        # Only the AST dump
  %(prog)s --jobs 4 script.es     # Evaluate statements on 4 workers
  %(prog)s -i                     # Interactive mode
        """
  )

  parser.add_argument(
      'script',
      nargs='?',
      help='eslog script file to execute'
  )

  parser.add_argument(
      '-i', '--interactive',
      action='store_true',
      help='Start interactive mode'
  )

  parser.add_argument(
      '--tokens',
      action='store_true',
      help='Show the token dump'
  )

  parser.add_argument(
      '--ast',
      action='store_true',
      help='Show the abstract syntax tree dump'
  )

  parser.add_argument(
      '-q', '--quiet',
      action='store_true',
      help='Only show the program output'
  )

  parser.add_argument(
      '--jobs',
      type=positive_int,
      default=1,
      help='Number of workers evaluating statements (default: 1)'
  )

  parser.add_argument(
      '--debug',
      action='store_true',
      help='Enable debug output for all stages'
  )

  parser.add_argument(
      '--version',
      action='version',
      version=VERSION
  )

  return parser


def positive_int(text: str) -> int:
  value = int(text)
  if value < 1:
    raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
  return value


def select_sections(args: argparse.Namespace) -> List[str]:
  """Which dump sections a run prints"""
  if args.quiet:
    return ["output"]
  picked = [name for name in ("tokens", "ast") if getattr(args, name)]
  return picked or list(SECTIONS)


def print_tokens(tokens: List[Token]) -> None:
  print("Tokens:")
  for token in tokens:
    print(format_token(token))


def print_ast(nodes: List[LogCall]) -> None:
  print("Abstract Syntax Tree:")
  for node in nodes:
    print(pretty_print_ast(node), end='')


def read_script(script_path: str) -> str:
  """Read a script, exiting with a hint when the file cannot be read"""
  try:
    return Path(script_path).read_text(encoding='utf-8')
  except FileNotFoundError:
    print(f"Error: Script file '{script_path}' not found")
    print(f"  Hint: Check the file path and make sure the file exists")
  except IsADirectoryError:
    print(f"Error: '{script_path}' is a directory")
  except PermissionError:
    print(f"Error: Permission denied reading '{script_path}'")
    print(f"  Hint: Make sure you have read permissions for this file")
  except UnicodeDecodeError as e:
    print(f"Error: Cannot decode file '{script_path}': {e}")
    print(f"  Hint: Make sure the file is a text file with UTF-8 encoding")
  sys.exit(1)


def run_source_text(source: str, filename: str, sections: List[str],
                    jobs: int = 1, debug: bool = False) -> None:
  """Run every stage on source, printing the requested sections"""
  lexer = create_lexer(filename, debug)
  parser = create_parser(debug)
  interpreter = create_interpreter(jobs=jobs, debug=debug)
  headed = sections != ["output"]

  tokens = lexer.lex(source)
  if "tokens" in sections:
    print_tokens(tokens)

  nodes = parser.parse(tokens)
  if "ast" in sections:
    if "tokens" in sections:
      print()
    print_ast(nodes)

  if "output" in sections:
    if headed:
      print()
      print("Output:")
    interpreter.interpret_program(nodes)


def run_script_file(script_path: str, sections: List[str], jobs: int = 1,
                    debug: bool = False) -> None:
  """Run an eslog script file"""
  source = read_script(script_path)
  try:
    run_source_text(source, script_path, sections, jobs, debug)
  except (MalformedStatementError, InvalidSyntaxError) as e:
    print(f"Syntax error in '{script_path}': {e}")
    sys.exit(1)
  except EslogRuntimeError as e:
    print(f"Runtime error in '{script_path}': {e}")
    sys.exit(1)
  except Exception as e:
    print(f"Unexpected error while executing '{script_path}': {e}")
    if debug:
      import traceback
      traceback.print_exc()
    sys.exit(1)


def setup_readline():
  """Setup readline with history and auto-completion"""
  if not READLINE_AVAILABLE:
    return

  history_file = os.path.expanduser("~/.eslog_history")
  try:
    readline.read_history_file(history_file)
  except OSError:
    pass  # First time, no history yet, or permission denied

  readline.set_history_length(1000)

  completions = ['console.log(', ':tokens ', ':ast ', ':help', 'exit']

  def completer(text, state):
    options = [cmd for cmd in completions if cmd.startswith(text)]
    if state < len(options):
      return options[state]
    return None

  readline.set_completer(completer)
  readline.parse_and_bind("tab: complete")

  import atexit
  atexit.register(readline.write_history_file, history_file)


def run_interactive_mode(jobs: int = 1, debug: bool = False) -> None:
  """Read statements line by line and run each one"""
  print(f"{VERSION} - Interactive Mode")
  print("Type 'exit' to quit, ':help' for commands")
  if debug:
    print("Debug mode enabled")
  print()

  setup_readline()

  while True:
    try:
      code = input("eslog> ")
    except (KeyboardInterrupt, EOFError):
      print("\nGoodbye!")
      break

    command = code.strip()
    if command in ("exit", "exit;"):
      break
    if not command:
      continue

    if command == ":help":
      print("Commands:")
      print("  :tokens <src>     - Show the token dump")
      print("  :ast <src>        - Show the AST dump")
      print("  :help             - Show this help")
      print("  exit              - Leave interactive mode")
      print()
      print("Statements:")
      print('  console.log("sum:", 2+3);')
      continue

    if command.startswith(":tokens "):
      sections, command = ["tokens"], command[len(":tokens "):]
    elif command.startswith(":ast "):
      sections, command = ["ast"], command[len(":ast "):]
    else:
      sections = ["output"]

    try:
      run_source_text(command, "<stdin>", sections, jobs, debug)
    except EslogError as e:
      print(e)


def main(argv: Optional[List[str]] = None) -> None:
  """Main entry point for eslog"""
  arg_parser = create_arg_parser()
  args = arg_parser.parse_args(argv)

  if args.interactive:
    run_interactive_mode(jobs=args.jobs, debug=args.debug)
    return

  if not args.script:
    print("Please provide a file to execute")
    arg_parser.print_usage()
    sys.exit(1)

  run_script_file(args.script, select_sections(args), jobs=args.jobs, debug=args.debug)


if __name__ == "__main__":
  main()
