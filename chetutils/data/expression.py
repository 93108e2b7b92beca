"""
Filter and sort expressions for DataTable.select.

Filter grammar (keywords are case-insensitive):

    expr      := and_expr (OR and_expr)*
    and_expr  := not_expr (AND not_expr)*
    not_expr  := NOT not_expr | predicate
    predicate := '(' expr ')'
               | operand [ compare operand
                         | [NOT] LIKE operand
                         | [NOT] IN '(' operand (',' operand)* ')'
                         | IS [NOT] NULL ]
    compare   := '=' | '<>' | '!=' | '<' | '<=' | '>' | '>='
    operand   := column | [column name] | number | 'string' | #date# | TRUE | FALSE | NULL

Comparisons involving NULL are false. Literals compared with a typed
column are converted to the column's type up front. LIKE accepts `%` and
`*` wildcards.

Sort expressions are comma-separated column names, each optionally
followed by ASC or DESC. Nulls sort first in ascending order.
"""

from __future__ import annotations

import operator
import re
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from .table import DataRow, DataTable

Predicate = Callable[["DataRow"], bool]
Getter = Callable[["DataRow"], Any]


class ExpressionError(ValueError):
    """Raised when a filter or sort expression cannot be parsed."""

    def __init__(self, message: str, expression: str):
        self.expression = expression
        super().__init__(f"{message} in expression: {expression}")


# =============================================================================
# TOKENIZER
# =============================================================================

KEYWORDS = {"AND", "OR", "NOT", "LIKE", "IN", "IS", "NULL", "TRUE", "FALSE", "ASC", "DESC"}

TOKEN_PATTERN = re.compile(
    r"""
    \s*(?:
        (?P<number>-?(?:\d+\.\d*|\.\d+|\d+))
      | '(?P<string>(?:[^']|'')*)'
      | \#(?P<date>[^#]*)\#
      | \[(?P<bracketed>[^\]]+)\]
      | (?P<word>[A-Za-z_一-龥][\w一-龥]*)
      | (?P<op><>|!=|<=|>=|=|<|>|\(|\)|,)
    )
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class Token:
    kind: str
    value: Any


def tokenize(expression: str) -> list[Token]:
    tokens = []
    position = 0
    text = expression.rstrip()
    while position < len(text):
        match = TOKEN_PATTERN.match(text, position)
        if match is None or match.end() == position:
            raise ExpressionError(f"Unexpected character at position {position}", expression)
        position = match.end()
        kind = match.lastgroup
        value = match.group(kind)
        if kind == "number":
            tokens.append(Token("literal", Decimal(value) if "." in value else int(value)))
        elif kind == "string":
            tokens.append(Token("literal", value.replace("''", "'")))
        elif kind == "date":
            try:
                tokens.append(Token("literal", _parse_date_literal(value)))
            except ValueError:
                raise ExpressionError(f"Invalid date literal #{value}#", expression) from None
        elif kind == "bracketed":
            tokens.append(Token("column", value))
        elif kind == "word":
            upper = value.upper()
            tokens.append(Token("keyword", upper) if upper in KEYWORDS else Token("column", value))
        else:
            tokens.append(Token("op", value))
    return tokens


def _parse_date_literal(text: str) -> datetime:
    text = text.strip()
    for fmt in ("%m/%d/%Y %H:%M:%S", "%m/%d/%Y", "%Y/%m/%d %H:%M:%S", "%Y/%m/%d"):
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return datetime.fromisoformat(text)


# =============================================================================
# VALUE HELPERS
# =============================================================================

def _normalize(value: Any, case_sensitive: bool) -> Any:
    if isinstance(value, str) and not case_sensitive:
        return value.lower()
    if isinstance(value, float):
        return Decimal(repr(value))
    return value


# Values of different kinds sort numbers, then text, then dates, then the rest
SORT_RANKS = ((int, 0), (float, 0), (Decimal, 0), (str, 1), (datetime, 2))


def _sort_key(value: Any, case_sensitive: bool) -> tuple:
    if value is None:
        return (False, 0, 0)
    value = _normalize(value, case_sensitive)
    for kind, rank in SORT_RANKS:
        if isinstance(value, kind):
            return (True, rank, value)
    return (True, len(SORT_RANKS), str(value))


def _like_pattern(pattern: str, case_sensitive: bool) -> re.Pattern:
    parts = [".*" if char in "%*" else re.escape(char) for char in pattern]
    return re.compile("".join(parts), 0 if case_sensitive else re.IGNORECASE | re.DOTALL)


NUMERIC_TYPES = (int, float, Decimal)

COMPARISONS = {
    "=": operator.eq,
    "<>": operator.ne,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


# =============================================================================
# FILTER PARSER
# =============================================================================

@dataclass
class _Operand:
    getter: Getter
    column_type: Optional[type] = None
    literal: bool = False
    value: Any = None


class _FilterParser:
    def __init__(self, expression: str, table: "DataTable"):
        self.expression = expression
        self.table = table
        self.tokens = tokenize(expression)
        self.position = 0

    # -- token stream ---------------------------------------------------------

    def _peek(self) -> Optional[Token]:
        return self.tokens[self.position] if self.position < len(self.tokens) else None

    def _next(self) -> Token:
        token = self._peek()
        if token is None:
            raise ExpressionError("Unexpected end of expression", self.expression)
        self.position += 1
        return token

    def _accept(self, kind: str, value: Any) -> bool:
        token = self._peek()
        if token is not None and token.kind == kind and token.value == value:
            self.position += 1
            return True
        return False

    def _expect(self, kind: str, value: Any) -> None:
        if not self._accept(kind, value):
            raise ExpressionError(f"Expected '{value}'", self.expression)

    # -- grammar --------------------------------------------------------------

    def parse(self) -> Predicate:
        predicate = self._or()
        if self._peek() is not None:
            raise ExpressionError(f"Unexpected token '{self._peek().value}'", self.expression)
        return predicate

    def _or(self) -> Predicate:
        terms = [self._and()]
        while self._accept("keyword", "OR"):
            terms.append(self._and())
        if len(terms) == 1:
            return terms[0]
        return lambda row: any(term(row) for term in terms)

    def _and(self) -> Predicate:
        terms = [self._not()]
        while self._accept("keyword", "AND"):
            terms.append(self._not())
        if len(terms) == 1:
            return terms[0]
        return lambda row: all(term(row) for term in terms)

    def _not(self) -> Predicate:
        if self._accept("keyword", "NOT"):
            inner = self._not()
            return lambda row: not inner(row)
        return self._predicate()

    def _predicate(self) -> Predicate:
        if self._accept("op", "("):
            inner = self._or()
            self._expect("op", ")")
            return inner

        left = self._operand()
        token = self._peek()

        if token is not None and token.kind == "op" and token.value in COMPARISONS:
            self.position += 1
            right = self._operand()
            return self._comparison(left, right, COMPARISONS[token.value])

        negate = self._accept("keyword", "NOT")
        if self._accept("keyword", "LIKE"):
            predicate = self._like(left, self._operand())
        elif self._accept("keyword", "IN"):
            predicate = self._in(left)
        elif not negate and self._accept("keyword", "IS"):
            is_not = self._accept("keyword", "NOT")
            self._expect("keyword", "NULL")
            getter = left.getter
            if is_not:
                return lambda row: getter(row) is not None
            return lambda row: getter(row) is None
        elif negate:
            raise ExpressionError("Expected LIKE or IN after NOT", self.expression)
        else:
            getter = left.getter
            return lambda row: bool(getter(row))
        if negate:
            return lambda row, inner=predicate: not inner(row)
        return predicate

    def _operand(self) -> _Operand:
        token = self._next()
        if token.kind == "literal":
            return _Operand(lambda row, v=token.value: v, literal=True, value=token.value)
        if token.kind == "keyword" and token.value in ("TRUE", "FALSE", "NULL"):
            value = {"TRUE": True, "FALSE": False, "NULL": None}[token.value]
            return _Operand(lambda row, v=value: v, literal=True, value=value)
        if token.kind == "column":
            if not self.table.has_column(token.value):
                raise ExpressionError(f"Cannot find column [{token.value}]", self.expression)
            index = self.table.column_index(token.value)
            column_type = self.table.columns[index].data_type
            return _Operand(lambda row, i=index: row[i], column_type=column_type)
        raise ExpressionError(f"Unexpected token '{token.value}'", self.expression)

    # -- predicates -----------------------------------------------------------

    def _typed(self, operand: _Operand, other: _Operand) -> _Operand:
        """Convert a literal to the column type of the other side."""
        from .table import coerce_value

        if not operand.literal or other.column_type in (None, object) or operand.value is None:
            return operand
        if other.column_type in NUMERIC_TYPES and type(operand.value) in NUMERIC_TYPES:
            return operand
        try:
            value = coerce_value(operand.value, other.column_type)
        except ValueError:
            raise ExpressionError(
                f"Cannot compare {operand.value!r} with a {other.column_type.__name__} column",
                self.expression,
            ) from None
        return _Operand(lambda row, v=value: v, literal=True, value=value)

    def _comparison(self, left: _Operand, right: _Operand, compare: Callable[[Any, Any], bool]) -> Predicate:
        left, right = self._typed(left, right), self._typed(right, left)
        case_sensitive = self.table.case_sensitive

        def predicate(row: "DataRow") -> bool:
            a, b = left.getter(row), right.getter(row)
            if a is None or b is None:
                return False
            try:
                return compare(_normalize(a, case_sensitive), _normalize(b, case_sensitive))
            except TypeError:
                return False

        return predicate

    def _like(self, left: _Operand, right: _Operand) -> Predicate:
        if not right.literal or not isinstance(right.value, str):
            raise ExpressionError("LIKE needs a string pattern", self.expression)
        pattern = _like_pattern(right.value, self.table.case_sensitive)
        getter = left.getter

        def predicate(row: "DataRow") -> bool:
            value = getter(row)
            return value is not None and pattern.fullmatch(str(value)) is not None

        return predicate

    def _in(self, left: _Operand) -> Predicate:
        self._expect("op", "(")
        candidates = [self._typed(self._operand(), left)]
        while self._accept("op", ","):
            candidates.append(self._typed(self._operand(), left))
        self._expect("op", ")")
        case_sensitive = self.table.case_sensitive
        getter = left.getter

        def predicate(row: "DataRow") -> bool:
            value = getter(row)
            if value is None:
                return False
            needle = _normalize(value, case_sensitive)
            return any(
                needle == _normalize(candidate.getter(row), case_sensitive)
                for candidate in candidates
            )

        return predicate


def compile_filter(expression: str, table: "DataTable") -> Predicate:
    """
    Compile a filter expression against a table's columns.

    Raises:
        ExpressionError: Malformed expression or unknown column.
    """
    return _FilterParser(expression, table).parse()


# =============================================================================
# SORT
# =============================================================================

def compile_sort(expression: str, table: "DataTable") -> Callable[[list["DataRow"]], list["DataRow"]]:
    """
    Compile "Col1 DESC, Col2" into a function that orders a list of rows.

    Raises:
        ExpressionError: Malformed expression or unknown column.
    """
    keys = []
    for part in expression.split(","):
        tokens = tokenize(part)
        if not tokens or tokens[0].kind != "column":
            raise ExpressionError("Expected a column name", expression)
        name = tokens[0].value
        descending = False
        if len(tokens) == 2 and tokens[1].kind == "keyword" and tokens[1].value in ("ASC", "DESC"):
            descending = tokens[1].value == "DESC"
        elif len(tokens) != 1:
            raise ExpressionError(f"Invalid sort clause '{part.strip()}'", expression)
        if not table.has_column(name):
            raise ExpressionError(f"Cannot find column [{name}]", expression)
        keys.append((table.column_index(name), descending))

    case_sensitive = table.case_sensitive

    def sort_rows(rows: list["DataRow"]) -> list["DataRow"]:
        ordered = list(rows)
        # Stable sorts applied from the last key to the first
        for index, descending in reversed(keys):
            ordered.sort(
                key=lambda row, i=index: _sort_key(row[i], case_sensitive),
                reverse=descending,
            )
        return ordered

    return sort_rows
