"""
Host model validation - Check the host's graph for structural issues.

The viewport never trusts the host model blindly: on every model-change
notification it validates the snapshot and logs what it finds, then keeps
working with whatever is consistent. Validation never raises.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .models import Block, Connection, Pin, PinKind


class IssueSeverity(str, Enum):
    """Severity levels for validation issues."""
    ERROR = "error"      # Inconsistent reference, the item is unusable
    WARNING = "warning"  # Suspicious, the host should review
    INFO = "info"        # Informational, may be intentional


@dataclass
class ValidationIssue:
    """A single validation issue found in the host model."""
    severity: IssueSeverity
    message: str
    block_id: str | None = None
    pin_id: str | None = None
    connection_id: str | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "type": self.severity.value,
            "message": self.message
        }
        if self.block_id:
            result["block_id"] = self.block_id
        if self.pin_id:
            result["pin_id"] = self.pin_id
        if self.connection_id:
            result["connection_id"] = self.connection_id
        return result


def validate_graph(
    blocks: Iterable[Block],
    pins: Iterable[Pin],
    connections: Iterable[Connection],
) -> list[ValidationIssue]:
    """
    Validate a host graph snapshot and return a list of issues.

    Checks for:
    - Pins whose owner block doesn't exist - ERROR
    - Connections referencing missing pins - ERROR
    - Connections not running from an output to an input - ERROR
    - Inputs targeted by more than one connection - WARNING
    - `connected` flags disagreeing with the connections - WARNING
    - Empty graph - INFO

    Args:
        blocks: Host blocks
        pins: Host pins
        connections: Host connections

    Returns:
        List of ValidationIssue objects
    """
    blocks = list(blocks)
    pins = list(pins)
    connections = list(connections)
    issues: list[ValidationIssue] = []

    if not blocks:
        issues.append(ValidationIssue(
            severity=IssueSeverity.INFO,
            message="Graph has no blocks"
        ))

    block_ids = {b.id for b in blocks}
    pins_by_id = {p.id: p for p in pins}

    for pin in pins:
        if pin.block_id not in block_ids:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message=f"Pin references non-existent block: {pin.block_id}",
                pin_id=pin.id,
                block_id=pin.block_id
            ))

    referenced: set[str] = set()
    input_use: dict[str, int] = {}
    for conn in connections:
        source = pins_by_id.get(conn.from_pin)
        target = pins_by_id.get(conn.to_pin)

        if source is None:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message=f"Connection references non-existent output pin: {conn.from_pin}",
                connection_id=conn.id
            ))
        elif source.kind != PinKind.OUTPUT:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message=f"Connection starts at a non-output pin: {conn.from_pin}",
                connection_id=conn.id,
                pin_id=conn.from_pin
            ))

        if target is None:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message=f"Connection references non-existent input pin: {conn.to_pin}",
                connection_id=conn.id
            ))
        elif target.kind != PinKind.INPUT:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message=f"Connection ends at a non-input pin: {conn.to_pin}",
                connection_id=conn.id,
                pin_id=conn.to_pin
            ))
        else:
            input_use[conn.to_pin] = input_use.get(conn.to_pin, 0) + 1

        referenced.add(conn.from_pin)
        referenced.add(conn.to_pin)

    for pin_id, count in input_use.items():
        if count > 1:
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message=f"Input pin is the target of {count} connections",
                pin_id=pin_id
            ))

    # The host computes `connected`; flag disagreements but keep its value
    for pin in pins:
        if pin.connected and pin.id not in referenced:
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message="Pin is flagged connected but no connection references it",
                pin_id=pin.id
            ))
        elif not pin.connected and pin.id in referenced:
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message="Pin is referenced by a connection but flagged unconnected",
                pin_id=pin.id
            ))

    return issues


def validation_summary(issues: list[ValidationIssue]) -> dict:
    """
    Create a summary of validation issues.

    Args:
        issues: List of validation issues

    Returns:
        Dictionary with counts by severity
    """
    return {
        "total": len(issues),
        "errors": len([i for i in issues if i.severity == IssueSeverity.ERROR]),
        "warnings": len([i for i in issues if i.severity == IssueSeverity.WARNING]),
        "info": len([i for i in issues if i.severity == IssueSeverity.INFO]),
        "valid": len([i for i in issues if i.severity == IssueSeverity.ERROR]) == 0
    }
