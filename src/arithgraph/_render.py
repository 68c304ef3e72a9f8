"""Rich renderings of graphs and constraint reports for terminal output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from ._node import AddNode, ConstantNode, HintNode, InputNode, MulNode

if TYPE_CHECKING:
    from ._builder import Graph
    from ._check import ConstraintReport
    from ._node import Node


def _describe(node: Node) -> str:
    match node:
        case InputNode(position=position):
            return f"input[{position}]"
        case ConstantNode(value=value):
            return f"constant {value!r}"
        case AddNode(left=left, right=right):
            return f"{left} + {right}"
        case MulNode(left=left, right=right):
            return f"{left} * {right}"
        case HintNode(deps=deps, label=label):
            args = ", ".join(str(dep) for dep in deps)
            return f"{label or 'hint'}({args})"
    return type(node).__name__


def render_graph(graph: Graph, title: str = "Graph") -> Tree:
    """Render every node in creation order, with its value when filled."""
    tree = Tree(f"[bold]{escape(title)}[/bold] [dim]({len(graph)} nodes, {graph.domain!r})[/dim]")
    for index, (node, value) in enumerate(zip(graph.nodes, graph.values, strict=True)):
        line = Text.assemble((f"#{index} ", "bold"), (f"{node.kind:<8} ", "cyan"), _describe(node))
        if value is not None:
            line.append(f" = {value!r}", style="green")
        tree.add(line)

    if graph.constraints:
        constraints = tree.add("[bold]constraints[/bold]")
        for constraint in graph.constraints:
            constraints.add(escape(str(constraint)))
    return tree


def render_report(report: ConstraintReport) -> Panel:
    """Render a ConstraintReport as a panel listing each violation."""
    if report.ok:
        body: Table | Text = Text(f"✓ All {report.checked} constraint(s) hold", style="green")
    else:
        body = Table(show_header=True, header_style="bold cyan", box=None)
        body.add_column("Constraint", style="dim")
        body.add_column("Left", justify="right")
        body.add_column("Right", justify="right")
        for violation in report.violations:
            body.add_row(
                escape(str(violation.constraint)),
                f"[red]{violation.left_value!r}[/red]",
                f"[red]{violation.right_value!r}[/red]",
            )

    subtitle = None
    if report.unconstrained_hints:
        hints = ", ".join(str(hint_id) for hint_id in report.unconstrained_hints)
        subtitle = f"[yellow]⚠ unconstrained hints: {hints}[/yellow]"

    status = "[green]PASS[/green]" if report.ok else f"[red]FAIL ({len(report.violations)}/{report.checked})[/red]"
    return Panel(
        body,
        title=f"[bold]Constraint Results[/bold] {status}",
        subtitle=subtitle,
        border_style="cyan" if report.ok else "red",
    )
