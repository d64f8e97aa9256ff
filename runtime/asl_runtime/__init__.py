"""
ASL Runtime - Assignment Statement Language

This package provides a small interpreter for programs made of
`identifier = expression` statements separated by ';'.

**Language:**
- Integer literals, variable references
- Unary + and -, binary + - *, parentheses
- Standard precedence (unary > * > + -), left-associative

**Execution:**
- Statements run in order against one variable store
- The first failing statement aborts the run with a single `error`
- On success every assigned variable is reported once, in first
  assignment order

**Integer Model:**
- Fixed-width signed integers (32-bit wrap-around by default)
- 64-bit width and an overflow-error policy via InterpreterConfig

Version: 1.0.0
"""

__version__ = '1.0.0'

# ============================================================================
# Errors and Configuration
# ============================================================================

from .errors import (
    ASLError,
    E_SYNTAX_ERROR, E_INVALID_IDENTIFIER, E_UNINITIALIZED_VARIABLE, E_OVERFLOW,
)

from .config import InterpreterConfig

from .integers import IntegerModel

# ============================================================================
# Runtime
# ============================================================================

from .asl_runtime import (
    ASLInterpreter, ASLTokenizer, ASLParser, ASLEvaluator,
    VariableStore, InterpretResult, Statement,
    Token, TokenType, ASTNode, Literal, Identifier, UnaryOp, BinaryOp,
    interpret, format_result, tokenize,
    split_statements, parse_statement, is_valid_identifier, trim,
    ERROR_OUTPUT,
)


def run(program: str) -> str:
    """
    Interpret a program and return its printed output.

    Example:
        >>> print(run('x = 5; y = x - 10;'))
        x = 5
        y = -5
    """
    return '\n'.join(format_result(interpret(program)))


__all__ = [
    # Errors
    'ASLError',
    'E_SYNTAX_ERROR', 'E_INVALID_IDENTIFIER', 'E_UNINITIALIZED_VARIABLE', 'E_OVERFLOW',

    # Configuration
    'InterpreterConfig',
    'IntegerModel',

    # Runtime
    'ASLInterpreter', 'ASLTokenizer', 'ASLParser', 'ASLEvaluator',
    'VariableStore', 'InterpretResult', 'Statement',
    'Token', 'TokenType', 'ASTNode', 'Literal', 'Identifier', 'UnaryOp', 'BinaryOp',
    'interpret', 'format_result', 'tokenize',
    'split_statements', 'parse_statement', 'is_valid_identifier', 'trim',
    'ERROR_OUTPUT',

    # Convenience
    'run',
]
