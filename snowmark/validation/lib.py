"""Document validation and static analysis.

This module checks parsed documents for problems the grammar does not
rule out, before they are handed to a rendering layer.
"""

from dataclasses import dataclass

from snowmark.attribute import Background
from snowmark.gradient import Gradient
from snowmark.tree import walk


@dataclass
class ValidationIssue:
    """Represents a problem found in a document.

    Attributes:
        node_id: Id of the node with the issue, None for anonymous nodes.
        message: Human-readable description.
        issue_type: Category of the issue.
    """

    node_id: str | None
    message: str
    issue_type: str


def validate_document(document) -> list[ValidationIssue]:
    """Validate a document for problems the parser accepts.

    Performs the following checks:
        - Unique ID enforcement (no duplicate ids)
        - Gradient stop positions within [0, 1]

    Args:
        document: A Document or any node.

    Returns:
        list[ValidationIssue]: Issues found (empty if valid).

    Example:
        >>> issues = validate_document(parse_markup(text))
        >>> for issue in issues:
        ...     print(f"{issue.node_id}: {issue.message}")
    """
    issues: list[ValidationIssue] = []

    id_counts: dict[str, int] = {}
    for node in walk(document):
        if node.id is not None:
            id_counts[node.id] = id_counts.get(node.id, 0) + 1

    for node_id, count in id_counts.items():
        if count > 1:
            issues.append(
                ValidationIssue(
                    node_id=node_id,
                    message=f"Duplicate ID '{node_id}' appears {count} times",
                    issue_type="duplicate_id",
                )
            )

    issues.extend(_validate_stops(document))
    return issues


def is_valid(document) -> bool:
    """Check if a document has no validation issues."""
    return not validate_document(document)


def _validate_stops(document) -> list[ValidationIssue]:
    """Flag gradient stops positioned outside [0, 1].

    Stop positions are not range-checked by the gradient grammar; renderers
    assume the unit range.
    """
    issues: list[ValidationIssue] = []
    for node in walk(document):
        for kind, value in node.attributes.items():
            typed = getattr(value, "value", None)
            if not isinstance(typed, Background) or not isinstance(typed.fill, Gradient):
                continue
            for index, stop in enumerate(typed.fill.stops):
                if not 0.0 <= stop.position <= 1.0:
                    issues.append(
                        ValidationIssue(
                            node_id=node.id,
                            message=f"{kind.value} stop {index} at {stop.position} outside 0-1",
                            issue_type="stop_out_of_range",
                        )
                    )
    return issues


__all__ = ["ValidationIssue", "is_valid", "validate_document"]
