from pydantic import BaseModel
from typing import List


class DepartmentStat(BaseModel):
    department: str
    count: int


class GatepassAnalytics(BaseModel):
    totalGatepasses: int
    approved: int
    rejected: int
    exited: int
    pending: int
    totalUsers: int
    completionRate: int
    departmentStats: List[DepartmentStat]
