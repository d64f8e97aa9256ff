"""
ASL Error Definitions

Every failure raised while executing a program is an ASLError carrying one
of the codes below. The run loop collapses all of them into the single
generic `error` line; the code and message are kept for tests and logs.
"""


E_SYNTAX_ERROR = "E_SYNTAX_ERROR"
E_INVALID_IDENTIFIER = "E_INVALID_IDENTIFIER"
E_UNINITIALIZED_VARIABLE = "E_UNINITIALIZED_VARIABLE"
E_OVERFLOW = "E_OVERFLOW"


class ASLError(Exception):
    """Base exception for ASL runtime errors"""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


__all__ = [
    'ASLError',
    'E_SYNTAX_ERROR',
    'E_INVALID_IDENTIFIER',
    'E_UNINITIALIZED_VARIABLE',
    'E_OVERFLOW',
]
