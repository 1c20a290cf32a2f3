from enum import Enum


class CodeEntity(str, Enum):
    """Entities that get a human-readable code, valued by their prefix."""
    gatepass = "GP"
    visitor = "VIS"
    asset = "AST"
    employee = "EMP"
