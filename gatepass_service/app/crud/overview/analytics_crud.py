import math
from enum import Enum
from typing import Any, Dict, Iterable, List

from sqlalchemy.orm import Session

from shared.core.auth import ensure_role
from shared.core.schemas import UserToken
from shared.models.profiles import Profile
from shared.utils.enums import UserRole
from ...enum.gatepass_enum import GatepassStatus
from ...models.gatepass.gatepasses import Gatepass


def _field(row: Any, name: str):
    value = row.get(name) if isinstance(row, dict) else getattr(row, name)
    return value.value if isinstance(value, Enum) else value


def status_counts(rows: Iterable[Any]) -> Dict[str, int]:
    """
    Tally rows by status.
    :param rows: gatepass objects, query rows or dicts carrying a ``status``
    :return: mapping of status value to count; absent statuses are omitted
    """
    counts: Dict[str, int] = {}
    for row in rows:
        status = _field(row, "status")
        counts[status] = counts.get(status, 0) + 1
    return counts


def department_counts(rows: Iterable[Any]) -> List[Dict[str, Any]]:
    """
    Tally rows by department, busiest first.
    Departments with equal counts keep the order in which they were first seen.
    """
    counts: Dict[str, int] = {}
    for row in rows:
        department = _field(row, "department")
        counts[department] = counts.get(department, 0) + 1

    stats = [{"department": d, "count": c} for d, c in counts.items()]
    # sorted() is stable, dict preserves first-seen order
    return sorted(stats, key=lambda item: item["count"], reverse=True)


def completion_rate(rows: Iterable[Any]) -> int:
    """Percentage of exited gatepasses, rounded half up; 0 for no rows."""
    rows = list(rows)
    if not rows:
        return 0
    exited = sum(1 for row in rows if _field(row, "status") == GatepassStatus.exited.value)
    return int(math.floor(exited * 100 / len(rows) + 0.5))


def get_gatepass_analytics(db: Session, actor: UserToken):
    ensure_role(actor, UserRole.admin)

    rows = db.query(Gatepass.status, Gatepass.department).all()
    counts = status_counts(rows)
    total_users = db.query(Profile.id).count()

    return {
        "totalGatepasses": len(rows),
        "approved": counts.get(GatepassStatus.approved.value, 0)
        + counts.get(GatepassStatus.issued.value, 0),
        "rejected": counts.get(GatepassStatus.rejected.value, 0),
        "exited": counts.get(GatepassStatus.exited.value, 0),
        "pending": counts.get(GatepassStatus.pending.value, 0),
        "totalUsers": total_users,
        "completionRate": completion_rate(rows),
        "departmentStats": department_counts(rows),
    }
