"""
Expression parser package.

Turns expression text into postfix tokens and executes them:
- cursor: character-level scanning
- operators: the static operator table
- tokenizer: shunting-yard compiler
- postfix: stack-based execution
"""

from .cursor import NULL_CHAR, TextCursor
from .operators import NEGATE, OPERATORS, OperatorInfo, get_operator_info
from .postfix import execute_tokens
from .tokenizer import State, Tokenizer
from .tokens import LeftParenToken, OperandToken, OperatorToken, Token, TokenType

__all__ = [
    "NULL_CHAR",
    "TextCursor",
    "NEGATE",
    "OPERATORS",
    "OperatorInfo",
    "get_operator_info",
    "execute_tokens",
    "State",
    "Tokenizer",
    "LeftParenToken",
    "OperandToken",
    "OperatorToken",
    "Token",
    "TokenType",
]
