from enum import Enum


class RecipientType(str, Enum):
    individual = "individual"
    department = "department"
    all_staff = "all_staff"
    all_visitors = "all_visitors"


class CommunicationPriority(str, Enum):
    low = "low"
    normal = "normal"
    high = "high"
    urgent = "urgent"


class CommunicationType(str, Enum):
    message = "message"
    announcement = "announcement"
    alert = "alert"
    notification = "notification"
