"""Arithmetic computation graphs with hinted values and equality constraints."""

__all__ = [
    "AddNode",
    "ArithGraphConfig",
    "ArithGraphError",
    "ConfigError",
    "ConstantNode",
    "Constraint",
    "ConstraintReport",
    "ConstraintViolation",
    "DependencyGraph",
    "Graph",
    "HintNode",
    "InputCountMismatchError",
    "InputNode",
    "IntegerDomain",
    "InvalidInputError",
    "InvalidReferenceError",
    "ModularDomain",
    "MulNode",
    "Node",
    "NodeId",
    "NodeKind",
    "NotFilledError",
    "ResolverFailureError",
    "UnresolvedDependencyError",
    "ValueDomain",
    "check_constraints",
    "fill_values",
    "find_pyproject_toml",
    "get_config",
    "load_config",
    "render_graph",
    "render_report",
]

from ._builder import Graph
from ._check import ConstraintReport, ConstraintViolation, check_constraints
from ._config import ArithGraphConfig, find_pyproject_toml, get_config, load_config
from ._domain import IntegerDomain, ModularDomain, ValueDomain
from ._errors import (
    ArithGraphError,
    ConfigError,
    InputCountMismatchError,
    InvalidInputError,
    InvalidReferenceError,
    NotFilledError,
    ResolverFailureError,
    UnresolvedDependencyError,
)
from ._eval import fill_values
from ._graph import DependencyGraph
from ._node import AddNode, ConstantNode, Constraint, HintNode, InputNode, MulNode, Node, NodeId, NodeKind
from ._render import render_graph, render_report
