"""Compile query expressions to the daemon's JSON grammar."""

from __future__ import annotations

from typing import Any

from wmclient.models.expression import (
    AllOf,
    AnyOf,
    Empty,
    Exists,
    Expression,
    FalseExpr,
    IMatch,
    IName,
    IPcre,
    Match,
    Name,
    Not,
    Pcre,
    Since,
    Suffix,
    TrueExpr,
    Type,
)

_MARKERS = (TrueExpr, FalseExpr, Empty, Exists)
_PATTERNS = (Match, IMatch, Pcre, IPcre)
_NAMES = (Name, IName)


def compile_expression(expr: Expression) -> list[Any]:
    """Compile an expression tree into nested JSON arrays.

    The tree is only read, so one tree may be compiled concurrently.

    Raises:
        TypeError: If a node is not an expression
    """
    if isinstance(expr, (AllOf, AnyOf)):
        return [expr.tag, *(compile_expression(clause) for clause in expr.clauses)]

    if isinstance(expr, Not):
        return [expr.tag, compile_expression(expr.clause)]

    if isinstance(expr, _MARKERS):
        return [expr.tag]

    if isinstance(expr, Since):
        result: list[Any] = [expr.tag, expr.value]
        if expr.clockspec is not None:
            result.append(expr.clockspec.value)
        return result

    if isinstance(expr, Suffix):
        return [expr.tag, expr.suffix]

    if isinstance(expr, _PATTERNS):
        result = [expr.tag, expr.pattern]
        if expr.scope is not None:
            result.append(expr.scope.value)
        return result

    if isinstance(expr, _NAMES):
        # One name goes out as a bare string
        names: Any = expr.names[0] if len(expr.names) == 1 else list(expr.names)
        result = [expr.tag, names]
        if expr.scope is not None:
            result.append(expr.scope.value)
        return result

    if isinstance(expr, Type):
        return [expr.tag, expr.file_type]

    raise TypeError(f"Not a query expression: {expr!r}")
