"""Rails/Timecop: flag Timecop usage in favour of ActiveSupport TimeHelpers.

``Timecop.freeze`` without arguments becomes ``freeze_time`` and
``Timecop.return`` without a block becomes ``travel_back``. Every other
usage is reported but left for a human, because picking between ``travel``
and ``travel_to`` depends on whether the argument is a duration or a point
in time, which syntax alone cannot tell.

The engine walks the tree depth-first in pre-order and computes edits
eagerly alongside each diagnostic. Edits only ever cover the receiver and
selector of a call, so arguments and blocks survive byte for byte.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from contract.diagnostics import (
    REPLACEMENTS,
    TARGET_CONSTANT,
    DiagnosticKind,
    RewriteKind,
    message_for,
)
from parse.ruby import iter_preorder, node_text, parse_ruby_source
from report.models import CheckResult, Diagnostic, SourceRange, TextEdit

if TYPE_CHECKING:
    from tree_sitter import Node, Tree

SEND_OPERATORS = frozenset({".", "::"})
ASSIGNMENT_TYPES = frozenset({"assignment", "operator_assignment"})


@dataclass(frozen=True)
class CallInfo:
    """The send node whose receiver is a Timecop reference."""

    node: Node
    method: str
    selector: Node
    arguments: Node | None
    block: Node | None


@dataclass(frozen=True)
class TimecopMatch:
    """A matched Timecop reference and the call made on it, if any."""

    reference: Node
    call: CallInfo | None


@dataclass(frozen=True)
class CallShape:
    """Method name, argument count and block presence of a call site."""

    method: str | None
    argument_count: int
    has_block: bool
    is_multiline_receiver: bool


# ---------------------------------------------------------------------------
# Pattern matching
# ---------------------------------------------------------------------------


def _is_target_constant(node: Node, source_bytes: bytes) -> bool:
    if node.type != "constant":
        return False
    if node_text(source_bytes, node) != TARGET_CONSTANT:
        return False

    parent = node.parent
    if parent is None:
        return True
    if parent.type == "call" and parent.child_by_field_name("method") == node:
        return False
    if parent.type in ASSIGNMENT_TYPES and parent.child_by_field_name("left") == node:
        return False
    if parent.type == "scope_resolution" and parent.child_by_field_name("name") == node:
        # Foo::Timecop is someone else's constant; ::Timecop is the root one.
        return parent.child_by_field_name("scope") is None
    return True


def _reference_node(constant: Node) -> Node:
    parent = constant.parent
    if (
        parent is not None
        and parent.type == "scope_resolution"
        and parent.child_by_field_name("name") == constant
    ):
        return parent
    return constant


def _method_name(source_bytes: bytes, method_node: Node) -> str:
    # Timecop.() is sugar for Timecop.call()
    if method_node.type == "argument_list":
        return "call"
    return node_text(source_bytes, method_node)


def _is_assignment_target(call: Node) -> bool:
    parent = call.parent
    if parent is None:
        return False
    if parent.type == "left_assignment_list":
        return True
    return (
        parent.type in ASSIGNMENT_TYPES
        and parent.child_by_field_name("left") == call
    )


def _extract_call(reference: Node, source_bytes: bytes) -> CallInfo | None:
    parent = reference.parent
    if parent is None or parent.type != "call":
        return None
    if parent.child_by_field_name("receiver") != reference:
        return None

    method_node = parent.child_by_field_name("method")
    if method_node is None:
        return None

    operators = [
        child.type
        for child in parent.children
        if not child.is_named and child.end_byte <= method_node.start_byte
    ]
    if not operators or operators[-1] not in SEND_OPERATORS:
        return None

    arguments = parent.child_by_field_name("arguments")
    if method_node.type == "argument_list":
        arguments = method_node

    method = _method_name(source_bytes, method_node)
    if _is_assignment_target(parent):
        # Timecop.freeze = x sends freeze=, not freeze
        method = f"{method}="

    return CallInfo(
        node=parent,
        method=method,
        selector=method_node,
        arguments=arguments,
        block=parent.child_by_field_name("block"),
    )


def match_timecop(node: Node, source_bytes: bytes) -> TimecopMatch | None:
    """Match a bare or root-qualified ``Timecop`` constant.

    Returns None for every node that is not such a constant. When the
    reference is the receiver of a plain send, the call is extracted too.
    """
    if not _is_target_constant(node, source_bytes):
        return None

    reference = _reference_node(node)
    return TimecopMatch(
        reference=reference, call=_extract_call(reference, source_bytes)
    )


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def _argument_count(arguments: Node | None) -> int:
    if arguments is None:
        return 0
    return sum(1 for child in arguments.named_children if child.type != "comment")


def call_shape(match: TimecopMatch) -> CallShape:
    """Derive the classification shape of a match."""
    if match.call is None:
        return CallShape(
            method=None,
            argument_count=0,
            has_block=False,
            is_multiline_receiver=False,
        )

    selector = match.call.selector
    return CallShape(
        method=match.call.method,
        argument_count=_argument_count(match.call.arguments),
        has_block=match.call.block is not None,
        is_multiline_receiver=match.reference.end_point[0] != selector.start_point[0],
    )


def classify_call(shape: CallShape) -> tuple[DiagnosticKind, RewriteKind]:
    """Map a call shape to its diagnostic kind and rewrite kind."""
    if shape.method == "freeze":
        if shape.argument_count == 0:
            return DiagnosticKind.NO_ARG_BARE_CALL, RewriteKind.REPLACE_WITH_FREEZE_TIME
        return DiagnosticKind.CALL_WITH_ARGUMENTS, RewriteKind.NO_REWRITE

    if shape.method == "return":
        # travel_back takes no block; a human has to pick freeze_time/travel_to.
        if shape.has_block:
            return DiagnosticKind.RETURN_CALL, RewriteKind.NO_REWRITE
        return DiagnosticKind.RETURN_CALL, RewriteKind.REPLACE_WITH_TRAVEL_BACK

    if shape.method == "travel":
        return DiagnosticKind.TRAVEL_CALL, RewriteKind.NO_REWRITE

    return DiagnosticKind.GENERIC_USAGE, RewriteKind.NO_REWRITE


# ---------------------------------------------------------------------------
# Emission and rewriting
# ---------------------------------------------------------------------------


def _make_range(start_node: Node, end_node: Node) -> SourceRange:
    return SourceRange(
        start=start_node.start_byte,
        end=end_node.end_byte,
        start_line=start_node.start_point[0] + 1,
        start_col=start_node.start_point[1] + 1,
        end_line=end_node.end_point[0] + 1,
        end_col=end_node.end_point[1] + 1,
    )


def offense_range(match: TimecopMatch) -> SourceRange:
    """Range flagged for a match.

    Calls span receiver through arguments (or selector), never the block;
    bare references span only the reference.
    """
    if match.call is None:
        return _make_range(match.reference, match.reference)

    end_node = match.call.arguments or match.call.selector
    return _make_range(match.reference, end_node)


def emit_diagnostic(
    match: TimecopMatch, kind: DiagnosticKind, rewrite: RewriteKind
) -> Diagnostic:
    return Diagnostic(
        range=offense_range(match),
        message=message_for(kind),
        kind=kind,
        correctable=rewrite is not RewriteKind.NO_REWRITE,
    )


def compute_edit(match: TimecopMatch, rewrite: RewriteKind) -> TextEdit | None:
    """Edit replacing ``receiver . selector`` with the replacement token.

    Returns None for NO_REWRITE. The edit stops at the end of the selector,
    so ``()`` and any block are left exactly as written.
    """
    if rewrite is RewriteKind.NO_REWRITE or match.call is None:
        return None

    return TextEdit(
        start=match.reference.start_byte,
        end=match.call.selector.end_byte,
        replacement=REPLACEMENTS[rewrite],
    )


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


def check_node(
    node: Node, source_bytes: bytes
) -> tuple[Diagnostic, TextEdit | None] | None:
    """Run matcher, classifier, emitter and rewriter on a single node."""
    match = match_timecop(node, source_bytes)
    if match is None:
        return None

    kind, rewrite = classify_call(call_shape(match))
    return emit_diagnostic(match, kind, rewrite), compute_edit(match, rewrite)


def check_tree(tree: Tree, source_bytes: bytes) -> CheckResult:
    """Check every node of a parsed tree in pre-order."""
    result = CheckResult()
    for node in iter_preorder(tree.root_node):
        checked = check_node(node, source_bytes)
        if checked is None:
            continue
        diagnostic, edit = checked
        result.diagnostics.append(diagnostic)
        if edit is not None:
            result.edits.append(edit)
    return result


def check_source(source: str | bytes) -> CheckResult:
    """Parse Ruby source and check it."""
    source_bytes = source.encode("utf-8") if isinstance(source, str) else source
    tree = parse_ruby_source(source_bytes)
    return check_tree(tree, source_bytes)


__all__ = [
    "CallInfo",
    "CallShape",
    "TimecopMatch",
    "call_shape",
    "check_node",
    "check_source",
    "check_tree",
    "classify_call",
    "compute_edit",
    "emit_diagnostic",
    "match_timecop",
    "offense_range",
]
