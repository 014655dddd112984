"""Global enums: values are what the API and the order store carry."""

from enum import Enum


class PaymentMethod(str, Enum):
    CARD = "card"
    EFT = "eft"
    MOBILE = "mobile"


class OrderStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class DeliveryMethod(str, Enum):
    EMAIL = "email"
    DOWNLOAD = "download"
    BOTH = "both"

    @property
    def includes_email(self) -> bool:
        return self in (DeliveryMethod.EMAIL, DeliveryMethod.BOTH)

    @property
    def includes_download(self) -> bool:
        return self in (DeliveryMethod.DOWNLOAD, DeliveryMethod.BOTH)


class DeliveryChannel(str, Enum):
    EMAIL = "email"
    DOWNLOAD = "download"


class EmailDeliveryStatus(str, Enum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"


class DownloadStatus(str, Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class AttendanceStatus(str, Enum):
    ATTENDING = "attending"
    INTERESTED = "interested"
    NOT_ATTENDING = "not_attending"


class NotificationType(str, Enum):
    EVENT = "event"
    SYSTEM = "system"
