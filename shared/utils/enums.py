from enum import Enum


class UserRole(str, Enum):
    admin = "admin"
    security_officer = "security_officer"
    staff = "staff"


class NotificationSeverity(str, Enum):
    info = "info"
    success = "success"
    warning = "warning"
    error = "error"
