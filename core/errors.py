"""
Domain error taxonomy.

Every error raised by domain or service code derives from DomainError and
carries a machine-readable code, a message and optional details. The HTTP
layer renders them through a single exception handler using `http_status`.
"""
from __future__ import annotations
from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for all domain errors."""

    code = "DOMAIN_ERROR"
    http_status = 400

    def __init__(self, message: str, *, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class ValidationError(DomainError):
    """Malformed or out-of-range input."""

    code = "VALIDATION_ERROR"
    http_status = 422


class NotFoundError(DomainError):
    """Missing entity, or one that belongs to another tenant."""

    code = "NOT_FOUND"
    http_status = 404

    def __init__(self, resource: str, resource_id: Any = None):
        super().__init__(
            f"{resource} not found",
            details={"resource": resource, "id": None if resource_id is None else str(resource_id)},
        )
        self.resource = resource


class ConflictError(DomainError):
    """Concurrent finalization or optimistic-lock collision."""

    code = "CONFLICT"
    http_status = 409


class CanceledError(DomainError):
    """The caller aborted or the request deadline passed."""

    code = "CANCELED"
    http_status = 408


class SchedulingRuleViolation(DomainError):
    """A shift adjustment breaks a scheduling rule."""

    code = "SCHEDULING_RULE_VIOLATION"
    http_status = 422


class CapacityExceededError(SchedulingRuleViolation):
    code = "CAPACITY_EXCEEDED"

    def __init__(self, shift_slot_id: str, capacity: int, assigned: int):
        super().__init__(
            f"shift slot {shift_slot_id} has capacity {capacity} but {assigned} members were assigned",
            details={"shift_slot_id": shift_slot_id, "capacity": capacity, "assigned": assigned},
        )


class OverlapError(SchedulingRuleViolation):
    code = "OVERLAPPING_ASSIGNMENT"

    def __init__(self, member_id: str, first_slot_id: str, second_slot_id: str):
        super().__init__(
            f"member {member_id} is assigned to overlapping slots {first_slot_id} and {second_slot_id}",
            details={
                "member_id": member_id,
                "first_slot_id": first_slot_id,
                "second_slot_id": second_slot_id,
            },
        )


class IneligibleAssignmentError(SchedulingRuleViolation):
    code = "INELIGIBLE_ASSIGNMENT"

    def __init__(self, member_id: str, shift_slot_id: str, reason: str):
        super().__init__(
            f"member {member_id} cannot be assigned to slot {shift_slot_id}: {reason}",
            details={"member_id": member_id, "shift_slot_id": shift_slot_id, "reason": reason},
        )
