from enum import Enum


class VisitorStatus(str, Enum):
    pending = "pending"
    checked_in = "checked_in"
    checked_out = "checked_out"
    expired = "expired"
