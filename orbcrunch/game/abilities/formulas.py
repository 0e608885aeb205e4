"""
Sandboxed evaluation of captain ability formulas.

Formulas in the captain table are either plain numbers or short expressions
written in a restricted subset of Python, for example::

    "2.5 if unit.type in ('STR', 'DEX') else 1"
    "1 + 0.5 * (perc_hp <= 30)"
    "4.0 if hit == 'Perfect' else 1"

Expressions are parsed with :mod:`ast` and interpreted node by node; only the
node types, names, attributes and functions listed here are accepted, so a
formula can never reach builtins, imports or arbitrary attributes.
"""

import ast
import math
import operator
from dataclasses import dataclass
from typing import Any, Callable, Union

from ...core.data.data_structures import UnitTemplate
from ...core.errors import FormulaError

# Attributes of ``unit`` a formula may read
UNIT_ATTRIBUTES: dict[str, Callable[[UnitTemplate], Any]] = {
    "type": lambda unit: unit.type.value,
    "combo": lambda unit: unit.combo,
    "max_level": lambda unit: unit.max_level,
    "min_atk": lambda unit: unit.min_atk,
    "max_atk": lambda unit: unit.max_atk,
    "min_hp": lambda unit: unit.min_hp,
    "max_hp": lambda unit: unit.max_hp,
    "unit_id": lambda unit: unit.unit_id,
    "name": lambda unit: unit.name,
}

FUNCTIONS: dict[str, Callable[..., Any]] = {
    "min": min,
    "max": max,
    "abs": abs,
    "floor": math.floor,
}

BINARY_OPERATORS: dict[type, Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
}

UNARY_OPERATORS: dict[type, Callable[[Any], Any]] = {
    ast.USub: operator.neg,
    ast.UAdd: operator.pos,
    ast.Not: operator.not_,
}

COMPARISON_OPERATORS: dict[type, Callable[[Any, Any], bool]] = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
    ast.In: lambda a, b: a in b,
    ast.NotIn: lambda a, b: a not in b,
}

# Variables bound by each capability signature
ATTACK_VARIABLES = ("unit", "position", "current_hp", "max_hp", "perc_hp")
CHAIN_VARIABLES = ATTACK_VARIABLES + ("hit",)
HP_VARIABLES = ("unit",)
ORB_VARIABLES = ("unit", "orb")


@dataclass(frozen=True)
class Formula:
    """A compiled formula: either a constant or a validated expression tree."""
    source: str
    variables: tuple[str, ...]
    _tree: Union[ast.Expression, None] = None
    _constant: Union[float, None] = None

    def evaluate(self, **bindings: Any) -> float:
        """Evaluate the formula with the given variable bindings.

        Raises:
            FormulaError: If evaluation fails (unbound variable, bad operand types,
                division by zero, ...)
        """
        if self._constant is not None:
            return self._constant
        assert self._tree is not None
        try:
            return float(_Interpreter(bindings).visit(self._tree.body))
        except (FormulaError, ArithmeticError, TypeError, ValueError) as e:
            raise FormulaError(f"Formula '{self.source}' failed: {e}") from e


def compile_formula(raw: Any, variables: tuple[str, ...]) -> Formula:
    """Compile a raw formula from the captain table.

    Args:
        raw: A number or an expression string
        variables: Names the expression may reference

    Returns:
        Formula ready to evaluate

    Raises:
        FormulaError: If the formula is missing, malformed, or uses anything
            outside the allowed subset
    """
    if raw is None:
        raise FormulaError("Formula is missing")
    if isinstance(raw, bool):
        raise FormulaError(f"Formula must be a number or expression, got {raw!r}")
    if isinstance(raw, (int, float)):
        return Formula(source=repr(raw), variables=variables, _constant=float(raw))
    if not isinstance(raw, str) or not raw.strip():
        raise FormulaError(f"Formula must be a number or expression, got {raw!r}")

    source = raw.strip()
    try:
        tree = ast.parse(source, mode="eval")
    except SyntaxError as e:
        raise FormulaError(f"Cannot parse formula '{source}': {e.msg}") from e

    _Validator(variables, source).visit(tree.body)
    return Formula(source=source, variables=variables, _tree=tree)


class _Validator:
    """Rejects any expression node outside the allowed subset."""

    def __init__(self, variables: tuple[str, ...], source: str):
        self.variables = variables
        self.source = source

    def fail(self, what: str) -> None:
        raise FormulaError(f"{what} not allowed in formula '{self.source}'")

    def visit(self, node: ast.AST) -> None:
        if isinstance(node, ast.Constant):
            if not isinstance(node.value, (int, float, str, bool)):
                self.fail(f"Constant {node.value!r}")
        elif isinstance(node, ast.Name):
            if node.id not in self.variables:
                self.fail(f"Name '{node.id}'")
        elif isinstance(node, ast.Attribute):
            if not (isinstance(node.value, ast.Name) and node.value.id == "unit" and "unit" in self.variables):
                self.fail("Attribute access outside 'unit'")
            if node.attr not in UNIT_ATTRIBUTES:
                self.fail(f"Attribute 'unit.{node.attr}'")
        elif isinstance(node, ast.BinOp):
            if type(node.op) not in BINARY_OPERATORS:
                self.fail(f"Operator {type(node.op).__name__}")
            self.visit(node.left)
            self.visit(node.right)
        elif isinstance(node, ast.UnaryOp):
            if type(node.op) not in UNARY_OPERATORS:
                self.fail(f"Operator {type(node.op).__name__}")
            self.visit(node.operand)
        elif isinstance(node, ast.BoolOp):
            for value in node.values:
                self.visit(value)
        elif isinstance(node, ast.Compare):
            for op in node.ops:
                if type(op) not in COMPARISON_OPERATORS:
                    self.fail(f"Comparison {type(op).__name__}")
            self.visit(node.left)
            for comparator in node.comparators:
                self.visit(comparator)
        elif isinstance(node, ast.IfExp):
            self.visit(node.test)
            self.visit(node.body)
            self.visit(node.orelse)
        elif isinstance(node, (ast.Tuple, ast.List)):
            for element in node.elts:
                self.visit(element)
        elif isinstance(node, ast.Call):
            if not isinstance(node.func, ast.Name) or node.func.id not in FUNCTIONS:
                self.fail("Function call")
            if node.keywords:
                self.fail("Keyword argument")
            for arg in node.args:
                self.visit(arg)
        else:
            self.fail(type(node).__name__)


class _Interpreter:
    """Evaluates a validated expression tree."""

    def __init__(self, bindings: dict[str, Any]):
        self.bindings = bindings

    def visit(self, node: ast.AST) -> Any:
        if isinstance(node, ast.Constant):
            return node.value
        if isinstance(node, ast.Name):
            if node.id not in self.bindings:
                raise FormulaError(f"Variable '{node.id}' is not bound")
            return self.bindings[node.id]
        if isinstance(node, ast.Attribute):
            unit = self.visit(node.value)
            return UNIT_ATTRIBUTES[node.attr](unit)
        if isinstance(node, ast.BinOp):
            left = self.visit(node.left)
            right = self.visit(node.right)
            # Strings and tuples would repeat or concatenate
            if not isinstance(left, (int, float)) or not isinstance(right, (int, float)):
                raise FormulaError(
                    f"Arithmetic on non-numbers: {type(left).__name__} and {type(right).__name__}"
                )
            return BINARY_OPERATORS[type(node.op)](left, right)
        if isinstance(node, ast.UnaryOp):
            return UNARY_OPERATORS[type(node.op)](self.visit(node.operand))
        if isinstance(node, ast.BoolOp):
            if isinstance(node.op, ast.And):
                result: Any = True
                for value in node.values:
                    result = self.visit(value)
                    if not result:
                        return result
                return result
            result = False
            for value in node.values:
                result = self.visit(value)
                if result:
                    return result
            return result
        if isinstance(node, ast.Compare):
            left = self.visit(node.left)
            for op, comparator in zip(node.ops, node.comparators):
                right = self.visit(comparator)
                if not COMPARISON_OPERATORS[type(op)](left, right):
                    return False
                left = right
            return True
        if isinstance(node, ast.IfExp):
            return self.visit(node.body) if self.visit(node.test) else self.visit(node.orelse)
        if isinstance(node, (ast.Tuple, ast.List)):
            return tuple(self.visit(element) for element in node.elts)
        if isinstance(node, ast.Call):
            assert isinstance(node.func, ast.Name)
            return FUNCTIONS[node.func.id](*(self.visit(arg) for arg in node.args))
        raise FormulaError(f"Unexpected node {type(node).__name__}")
