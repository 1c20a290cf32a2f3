from enum import Enum


class GatepassStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    issued = "issued"
    exited = "exited"
