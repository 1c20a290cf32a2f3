from enum import Enum


class AssetType(str, Enum):

    laptop = "laptop"
    desktop = "desktop"
    tablet = "tablet"
    phone = "phone"
    monitor = "monitor"
    keyboard = "keyboard"
    mouse = "mouse"
    other = "other"


class AssetStatus(str, Enum):

    available = "available"
    assigned = "assigned"
    maintenance = "maintenance"
    retired = "retired"
