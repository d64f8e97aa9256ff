"""
ASL Runtime - Assignment Statement Language Execution

Provides a runtime for executing ASL programs: a sequence of assignments
separated by ';', each of the form `identifier = expression`.

Architecture:
- Tokenizer: Tokenize an expression into tokens (unknown characters are skipped)
- Parser: Parse tokens into AST (expression -> term -> factor)
- Evaluator: Evaluate AST against the variable store
- Interpreter: Split statements, commit assignments, abort on first error

Syntax Examples:
    x = 2 + 3 * 4;
    y = (x - 10) * -2;
    z = --y + +1;

Output is one `<identifier> = <value>` line per assigned variable, or the
single line `error` when any statement fails.
"""

from typing import Dict, Iterator, List, Optional, Tuple
from dataclasses import dataclass, field
import logging
import re
import string

from .config import InterpreterConfig
from .errors import (
    ASLError,
    E_SYNTAX_ERROR,
    E_INVALID_IDENTIFIER,
    E_UNINITIALIZED_VARIABLE,
)
from .integers import IntegerModel


logger = logging.getLogger(__name__)

IDENTIFIER_RE = re.compile(r'[a-zA-Z_][a-zA-Z_0-9]*')
LITERAL_RE = re.compile(r'0|[1-9][0-9]*')

ERROR_OUTPUT = "error"

# U+0000 through U+0020
TRIM_CHARS = ''.join(chr(code) for code in range(0x21))


# ============================================================================
# Token Types
# ============================================================================

@dataclass(frozen=True)
class Token:
    """Token from an ASL expression"""
    type: str
    value: str
    pos: int


class TokenType:
    """Token type constants"""
    IDENTIFIER = "IDENTIFIER"
    NUMBER = "NUMBER"

    PLUS = "PLUS"
    MINUS = "MINUS"
    STAR = "STAR"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"

    EOF = "EOF"


# ============================================================================
# Tokenizer
# ============================================================================

class ASLTokenizer:
    """
    Tokenize an ASL expression.

    Characters that cannot start a token (whitespace, '=', '/', ...) are
    dropped without error; validation is left to the parser.
    """

    SYMBOLS = {
        '+': TokenType.PLUS,
        '-': TokenType.MINUS,
        '*': TokenType.STAR,
        '(': TokenType.LPAREN,
        ')': TokenType.RPAREN,
    }

    IDENTIFIER_START = frozenset(string.ascii_letters + '_')
    IDENTIFIER_PART = frozenset(string.ascii_letters + string.digits + '_')
    DIGITS = frozenset(string.digits)

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """Tokenize entire source"""
        while self.pos < len(self.source):
            ch = self.source[self.pos]

            if ch in self.DIGITS:
                self._read_run(TokenType.NUMBER, self.DIGITS)
            elif ch in self.IDENTIFIER_START:
                self._read_run(TokenType.IDENTIFIER, self.IDENTIFIER_PART)
            elif ch in self.SYMBOLS:
                self._add_token(self.SYMBOLS[ch], ch, self.pos)
                self.pos += 1
            else:
                if not ch.isspace():
                    logger.debug("Skipping character %r at position %d", ch, self.pos)
                self.pos += 1

        self._add_token(TokenType.EOF, '', self.pos)
        return self.tokens

    def _read_run(self, type: str, allowed: frozenset):
        """Read the longest run of allowed characters"""
        start = self.pos
        self.pos += 1
        while self.pos < len(self.source) and self.source[self.pos] in allowed:
            self.pos += 1
        self._add_token(type, self.source[start:self.pos], start)

    def _add_token(self, type: str, value: str, pos: int):
        self.tokens.append(Token(type=type, value=value, pos=pos))


def tokenize(source: str) -> List[Token]:
    """Tokenize source, including the trailing EOF token"""
    return ASLTokenizer(source).tokenize()


# ============================================================================
# AST Nodes
# ============================================================================

@dataclass
class ASTNode:
    """Base AST node"""
    pass


@dataclass
class Literal(ASTNode):
    """Integer literal"""
    value: int


@dataclass
class Identifier(ASTNode):
    """Variable reference"""
    name: str


@dataclass
class UnaryOp(ASTNode):
    """Unary operation ('+' or '-')"""
    op: str
    operand: ASTNode


@dataclass
class BinaryOp(ASTNode):
    """Binary operation ('+', '-' or '*')"""
    op: str
    left: ASTNode
    right: ASTNode


# ============================================================================
# Parser
# ============================================================================

class ASLParser:
    """
    Parse expression tokens into an AST.

    Grammar:
        expression := term (('+' | '-') term)*
        term       := factor ('*' factor)*
        factor     := '(' expression ')' | '-' factor | '+' factor
                    | LITERAL | IDENTIFIER

    The cursor only moves forward. Tokens left after the top-level
    expression are ignored unless `strict` is set; a leftover '(' or ')'
    is always reported as a mismatched parenthesis.
    """

    def __init__(self, tokens: List[Token], integers: Optional[IntegerModel] = None,
                 strict: bool = False):
        self.tokens = tokens
        self.pos = 0
        self.integers = integers or IntegerModel()
        self.strict = strict

    def parse(self) -> ASTNode:
        """Parse a complete right-hand side"""
        expr = self._parse_expression()

        if not self._is_at_end():
            token = self._peek()
            for leftover in self.tokens[self.pos:]:
                if leftover.type in (TokenType.LPAREN, TokenType.RPAREN):
                    raise ASLError(E_SYNTAX_ERROR,
                                   f"Mismatched parentheses: unexpected '{leftover.value}' at position {leftover.pos}")
            if self.strict:
                raise ASLError(E_SYNTAX_ERROR, f"Unexpected trailing token '{token.value}' at position {token.pos}")
            logger.debug("Ignoring %d trailing token(s) from position %d",
                         len(self.tokens) - 1 - self.pos, token.pos)

        return expr

    def _parse_expression(self) -> ASTNode:
        """Parse addition and subtraction"""
        left = self._parse_term()
        while self._match(TokenType.PLUS, TokenType.MINUS):
            op = self._previous().value
            right = self._parse_term()
            left = BinaryOp(op=op, left=left, right=right)
        return left

    def _parse_term(self) -> ASTNode:
        """Parse multiplication"""
        left = self._parse_factor()
        while self._match(TokenType.STAR):
            right = self._parse_factor()
            left = BinaryOp(op='*', left=left, right=right)
        return left

    def _parse_factor(self) -> ASTNode:
        """Parse exactly one factor, consuming its leading token"""
        if self._is_at_end():
            raise ASLError(E_SYNTAX_ERROR, "Syntax error: expected a value at end of expression")

        token = self._advance()

        # Unary sign chains are collected iteratively
        signs = []
        while token.type in (TokenType.MINUS, TokenType.PLUS):
            signs.append(token.value)
            if self._is_at_end():
                raise ASLError(E_SYNTAX_ERROR, "Syntax error: expected a value at end of expression")
            token = self._advance()

        node = self._parse_primary(token)
        for op in reversed(signs):
            node = UnaryOp(op=op, operand=node)
        return node

    def _parse_primary(self, token: Token) -> ASTNode:
        """Parse a parenthesized expression, literal or identifier"""
        if token.type == TokenType.LPAREN:
            expr = self._parse_expression()
            if not self._match(TokenType.RPAREN):
                raise ASLError(E_SYNTAX_ERROR, f"Mismatched parentheses: '(' at position {token.pos} is never closed")
            return expr

        if token.type == TokenType.NUMBER and LITERAL_RE.fullmatch(token.value):
            return Literal(value=self.integers.parse_literal(token.value))

        if token.type == TokenType.IDENTIFIER:
            return Identifier(name=token.value)

        raise ASLError(E_SYNTAX_ERROR, f"Invalid token '{token.value}' at position {token.pos}")

    # Parser utilities
    def _match(self, *types: str) -> bool:
        """Consume the current token if it matches any of the given types"""
        if self._peek().type in types:
            self._advance()
            return True
        return False

    def _advance(self) -> Token:
        if not self._is_at_end():
            self.pos += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        return self.tokens[self.pos]

    def _previous(self) -> Token:
        return self.tokens[self.pos - 1]


# ============================================================================
# Variable Store
# ============================================================================

class VariableStore:
    """
    Identifier -> value mapping for one program run.

    Iteration follows first assignment order; reassigning a name keeps its
    position. Entries are never removed except by clear().
    """

    def __init__(self):
        self._values: Dict[str, int] = {}

    def get(self, name: str) -> int:
        if name not in self._values:
            raise ASLError(E_UNINITIALIZED_VARIABLE, f"Uninitialized variable: {name}")
        return self._values[name]

    def assign(self, name: str, value: int):
        self._values[name] = value

    def items(self) -> List[Tuple[str, int]]:
        return list(self._values.items())

    def clear(self):
        self._values.clear()

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"VariableStore({self._values!r})"


# ============================================================================
# Evaluator
# ============================================================================

class ASLEvaluator:
    """Evaluate ASL AST against a variable store (read-only)"""

    def __init__(self, store: VariableStore, integers: Optional[IntegerModel] = None):
        self.store = store
        self.integers = integers or IntegerModel()

    def evaluate(self, node: ASTNode) -> int:
        """Evaluate AST node"""
        if isinstance(node, Literal):
            return node.value

        elif isinstance(node, Identifier):
            return self.store.get(node.name)

        elif isinstance(node, BinaryOp):
            # Left-folded chains are walked along their left spine
            pending = []
            while isinstance(node, BinaryOp):
                pending.append(node)
                node = node.left
            value = self.evaluate(node)
            for op_node in reversed(pending):
                right = self.evaluate(op_node.right)
                value = self._eval_binary_op(op_node.op, value, right)
            return value

        elif isinstance(node, UnaryOp):
            ops = []
            while isinstance(node, UnaryOp):
                ops.append(node.op)
                node = node.operand
            value = self.evaluate(node)
            for op in reversed(ops):
                if op == '-':
                    value = self.integers.negate(value)
            return value

        else:
            raise TypeError(f"Unknown AST node type: {type(node).__name__}")

    def _eval_binary_op(self, op: str, left: int, right: int) -> int:
        if op == '+':
            return self.integers.add(left, right)
        elif op == '-':
            return self.integers.subtract(left, right)
        elif op == '*':
            return self.integers.multiply(left, right)
        else:
            raise ValueError(f"Unknown binary operator: {op}")


# ============================================================================
# Statements
# ============================================================================

@dataclass(frozen=True)
class Statement:
    """One `identifier = expression` statement, split but not evaluated"""
    target: str
    expression: str


def trim(text: str) -> str:
    """Strip ASCII control characters and spaces only (not NBSP etc.)"""
    return text.strip(TRIM_CHARS)


def split_statements(program: str) -> List[str]:
    """Split a program on ';', dropping statements that are blank"""
    statements = []
    for chunk in program.split(';'):
        chunk = trim(chunk)
        if chunk:
            statements.append(chunk)
    return statements


def is_valid_identifier(text: str) -> bool:
    return IDENTIFIER_RE.fullmatch(text) is not None


def parse_statement(text: str) -> Statement:
    """Split a statement on its first '=' and validate the target"""
    target, sep, expression = text.partition('=')
    if not sep:
        raise ASLError(E_SYNTAX_ERROR, f"Syntax error: missing '=' in statement {text!r}")

    target = trim(target)
    expression = trim(expression)

    if not is_valid_identifier(target):
        raise ASLError(E_INVALID_IDENTIFIER, f"Invalid identifier: {target!r}")
    if '=' in expression:
        raise ASLError(E_SYNTAX_ERROR, f"Syntax error: unexpected '=' in expression {expression!r}")

    return Statement(target=target, expression=expression)


# ============================================================================
# Runtime Interface
# ============================================================================

@dataclass
class InterpretResult:
    """Outcome of one program run"""
    ok: bool
    variables: List[Tuple[str, int]] = field(default_factory=list)
    error: Optional[ASLError] = None

    @property
    def lines(self) -> List[str]:
        return format_result(self)


class ASLInterpreter:
    """Main ASL runtime interface"""

    def __init__(self, config: Optional[InterpreterConfig] = None):
        self.config = config or InterpreterConfig()
        self.integers = IntegerModel(self.config.bits, self.config.overflow)
        self.store = VariableStore()
        self.evaluator = ASLEvaluator(self.store, self.integers)

    def interpret(self, program: str) -> InterpretResult:
        """
        Run a whole program from an empty store.

        The first failing statement aborts the run; no variables are
        reported in that case, including ones assigned before the failure.
        """
        self.store.clear()
        try:
            self.execute(program)
        except ASLError as e:
            logger.debug("Program aborted: %s", e)
            return InterpretResult(ok=False, error=e)
        return InterpretResult(ok=True, variables=self.store.items())

    def execute(self, program: str):
        """Execute statements against the current store, raising on failure"""
        for index, text in enumerate(split_statements(program), start=1):
            statement = parse_statement(text)
            value = self.evaluate_expression(statement.expression)
            self.store.assign(statement.target, value)
            logger.debug("Statement %d: %s = %d", index, statement.target, value)

    def evaluate_expression(self, expression: str) -> int:
        """Tokenize, parse and evaluate one right-hand side"""
        tokens = ASLTokenizer(expression).tokenize()
        try:
            ast = ASLParser(tokens, self.integers, strict=self.config.strict).parse()
            return self.evaluator.evaluate(ast)
        except RecursionError:
            raise ASLError(E_SYNTAX_ERROR, "Syntax error: expression nested too deeply") from None

    def get_var(self, name: str) -> int:
        """Get variable from the store"""
        return self.store.get(name)

    def get_env(self) -> Dict[str, int]:
        """Get a copy of the entire store"""
        return dict(self.store.items())


# ============================================================================
# Convenience Functions
# ============================================================================

def interpret(program: str, config: Optional[InterpreterConfig] = None) -> InterpretResult:
    """
    Interpret an ASL program (convenience function)

    Args:
        program: Program text, statements separated by ';'
        config: Interpreter settings (32-bit wrap, permissive by default)

    Returns:
        InterpretResult with the ordered variables or the error

    Example:
        >>> interpret('x = 2 + 3 * 4;').variables
        [('x', 14)]
        >>> interpret('x = y + 1;').ok
        False
    """
    return ASLInterpreter(config).interpret(program)


def format_result(result: InterpretResult) -> List[str]:
    """Render a result as output lines"""
    if not result.ok:
        return [ERROR_OUTPUT]
    return [f"{name} = {value}" for name, value in result.variables]


# ============================================================================
# Exports
# ============================================================================

__all__ = [
    'ASLInterpreter',
    'ASLTokenizer',
    'ASLParser',
    'ASLEvaluator',
    'VariableStore',
    'InterpretResult',
    'Statement',
    'interpret',
    'format_result',
    'tokenize',
    'split_statements',
    'trim',
    'TRIM_CHARS',
    'parse_statement',
    'is_valid_identifier',
    'TokenType',
    'Token',
    'ASTNode',
    'Literal',
    'Identifier',
    'UnaryOp',
    'BinaryOp',
    'ERROR_OUTPUT',
]
