"""
eslog Parser
Builds the tree of executable nodes from the lexer's tokens
Single pass over the tokens with a fixed lookahead of two, no backtracking
"""

from typing import List, Tuple, Union
from dataclasses import dataclass
from enum import Enum

from error_handling import InvalidSyntaxError
from lexing import Token, TokenKind


class Operator(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    POW = "^"


OPERATOR_TOKENS = {
    TokenKind.PLUS: Operator.ADD,
    TokenKind.MINUS: Operator.SUB,
    TokenKind.MULTIPLY: Operator.MUL,
    TokenKind.DIVIDE: Operator.DIV,
    TokenKind.MODULO: Operator.MOD,
    TokenKind.POWER: Operator.POW,
}


# ============================================================================
# NODES
# ============================================================================

@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class IntLiteral:
    """Numeral text, only converted when an arithmetic node runs"""
    value: str


@dataclass(frozen=True)
class BinaryOp:
    operator: Operator
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class LogCall:
    """A console.log statement"""
    arguments: Tuple["Node", ...]


Node = Union[LogCall, StringLiteral, IntLiteral, BinaryOp]


# ============================================================================
# PARSER
# ============================================================================

class EslogParser:
    """Turns a token list into LogCall nodes"""

    def __init__(self, debug: bool = False):
        self.debug = debug

    def parse(self, tokens: List[Token]) -> List[LogCall]:
        nodes: List[LogCall] = []
        i = 0
        while i < len(tokens):
            self._expect_log_call(tokens, i)
            i += 2

            args: List[Node] = []
            while i < len(tokens) and tokens[i].kind != TokenKind.CONSOLE:
                token = tokens[i]
                if token.kind == TokenKind.STRING:
                    args.append(StringLiteral(token.literal))
                elif token.kind == TokenKind.INT:
                    if self._closes_window(tokens, i):
                        # INT ? INT is consumed whole, a non-operator middle yields no node
                        operator = OPERATOR_TOKENS.get(tokens[i + 1].kind)
                        if operator is not None:
                            args.append(BinaryOp(
                                operator,
                                IntLiteral(token.literal),
                                IntLiteral(tokens[i + 2].literal),
                            ))
                        i += 2
                    else:
                        args.append(IntLiteral(token.literal))
                i += 1

            call = LogCall(tuple(args))
            if self.debug:
                print(f"Parsed LogCall with {len(args)} arguments")
            nodes.append(call)

        if self.debug:
            print(f"Parsed {len(nodes)} statements")
        return nodes

    def _closes_window(self, tokens: List[Token], i: int) -> bool:
        """Whether the token two ahead of i is an INT"""
        return i + 2 < len(tokens) and tokens[i + 2].kind == TokenKind.INT

    def _expect_log_call(self, tokens: List[Token], i: int) -> None:
        token = tokens[i]
        if token.kind != TokenKind.CONSOLE:
            raise InvalidSyntaxError(
                f"expected 'console' to start a statement, got {token}", token.span)
        if i + 1 >= len(tokens):
            raise InvalidSyntaxError(
                "unexpected end of input after 'console', expected 'log'", token.span)
        nxt = tokens[i + 1]
        if nxt.kind != TokenKind.LOG:
            raise InvalidSyntaxError(
                f"expected 'log' after 'console', got {nxt}", nxt.span)


# Factory functions for creating parsers
def create_parser(debug: bool = False) -> EslogParser:
    """Create an eslog parser"""
    return EslogParser(debug=debug)


def create_debug_parser() -> EslogParser:
    """Create an eslog parser with debug enabled"""
    return EslogParser(debug=True)


def parse(tokens: List[Token]) -> List[LogCall]:
    """Parse tokens into statement nodes"""
    return create_parser().parse(tokens)


# Utility functions for working with the AST
def children_of(node: Node) -> Tuple[Node, ...]:
    if isinstance(node, LogCall):
        return node.arguments
    if isinstance(node, BinaryOp):
        return (node.left, node.right)
    return ()


def pretty_print_ast(node: Node, indent: int = 0) -> str:
    """Pretty print a node tree for the AST dump"""
    result = "  " * indent
    if isinstance(node, BinaryOp):
        result += f"BinaryOp({node.operator.name})"
    elif isinstance(node, (StringLiteral, IntLiteral)):
        result += f"{type(node).__name__}({node.value!r})"
    else:
        result += type(node).__name__
    result += "\n"

    for child in children_of(node):
        result += pretty_print_ast(child, indent + 1)

    return result
