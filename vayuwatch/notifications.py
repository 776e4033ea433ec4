"""
Notification module for VayuWatch.

This module contains the NotificationCenter class, which keeps the user's
air quality notifications (AQI alerts, warnings, seasonal advisories), and
the repositories it persists them through. The store is injected so the
center itself holds no global state: InMemoryNotificationRepository serves
tests and short-lived sessions, JsonFileNotificationRepository keeps
notifications across runs.
"""

import json
import logging
import os
import string
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Callable, Literal, Optional, Union

import numpy as np

from .aqi_category import AQICategory, classify, is_alert_category
from .config import Settings
from .variation_simulator import RandomSource

logger = logging.getLogger(__name__)

NotificationType = Literal["alert", "warning", "info", "seasonal"]
NOTIFICATION_TYPES = ("alert", "warning", "info", "seasonal")

MAX_NOTIFICATIONS = 50

_ID_ALPHABET = string.digits + string.ascii_lowercase


@dataclass(frozen=True)
class Notification:
    """
    A single notification shown in the notification center.

    Attributes:
        id: Unique identifier, "notif_<epoch ms>_<9 random chars>"
        type: alert, warning, info or seasonal
        title: Short heading
        message: Body text
        timestamp: When the notification was created
        read: Whether the user has seen it
        aqi: Optional AQI the notification refers to
        category: Optional AQI category
        location: Optional location name
        icon: Optional icon (emoji)
    """

    id: str
    type: NotificationType
    title: str
    message: str
    timestamp: datetime
    read: bool = False
    aqi: Optional[int] = None
    category: Optional[AQICategory] = None
    location: Optional[str] = None
    icon: Optional[str] = None

    def to_dict(self) -> dict[str, object]:
        """Converts the notification to a JSON-serializable dictionary."""
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "read": self.read,
            "aqi": self.aqi,
            "category": self.category.value if self.category else None,
            "location": self.location,
            "icon": self.icon,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Notification":
        """
        Builds a notification from a dictionary produced by to_dict().

        Raises:
            KeyError: If a required field is missing
            ValueError: If the type or category is unknown
        """
        if data["type"] not in NOTIFICATION_TYPES:
            raise ValueError(f"Unknown notification type: {data['type']!r}")
        category = data.get("category")
        return cls(
            id=data["id"],
            type=data["type"],
            title=data["title"],
            message=data["message"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
            read=bool(data.get("read", False)),
            aqi=data.get("aqi"),
            category=AQICategory(category) if category else None,
            location=data.get("location"),
            icon=data.get("icon"),
        )


class NotificationRepository:
    """
    Storage contract for the notification center.

    Implementations return notifications newest first from load() and
    replace the stored list wholesale in save().
    """

    def load(self) -> list[Notification]:
        raise NotImplementedError

    def save(self, notifications: list[Notification]) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        self.save([])


class InMemoryNotificationRepository(NotificationRepository):
    """Keeps notifications in process memory."""

    def __init__(self, notifications: Optional[list[Notification]] = None):
        self._notifications = list(notifications or [])

    def load(self) -> list[Notification]:
        return list(self._notifications)

    def save(self, notifications: list[Notification]) -> None:
        self._notifications = list(notifications)


class JsonFileNotificationRepository(NotificationRepository):
    """
    Keeps notifications in a JSON file.

    A missing file means no notifications. A corrupt file is logged, removed
    and treated as empty. Saves never leave a half-written file behind.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> list[Notification]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return [Notification.from_dict(item) for item in json.load(f)]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Discarding unreadable notifications file %s: %s", self.path, e)
            self.path.unlink(missing_ok=True)
            return []

    def save(self, notifications: list[Notification]) -> None:
        """Writes a sibling temporary file, then replaces the stored file with it."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump([n.to_dict() for n in notifications], f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        finally:
            tmp_path.unlink(missing_ok=True)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


@dataclass(frozen=True)
class SeasonalAlert:
    title: str
    message: str
    icon: str


SEASONAL_ALERTS = (
    SeasonalAlert(
        title="Winter Air Quality Advisory",
        message=(
            "Temperature inversion expected tonight. AQI may rise significantly. "
            "Avoid early morning outdoor activities."
        ),
        icon="❄️",
    ),
    SeasonalAlert(
        title="Stubble Burning Season",
        message=(
            "Crop residue burning in Punjab and Haryana may affect Delhi-NCR air "
            "quality over the next few days."
        ),
        icon="🔥",
    ),
    SeasonalAlert(
        title="Diwali Air Quality Alert",
        message=(
            "Post-festival air quality typically deteriorates. Stock up on masks "
            "and limit outdoor exposure."
        ),
        icon="🪔",
    ),
)


class NotificationCenter:
    """
    Manages the user's notification list.

    Notifications are kept newest first and capped at max_notifications.
    Every change is written through to the repository.
    """

    def __init__(
        self,
        repository: Optional[NotificationRepository] = None,
        max_notifications: int = MAX_NOTIFICATIONS,
        rng: RandomSource = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the center and load stored notifications.

        Args:
            repository: Storage backend, defaults to in-memory
            max_notifications: Cap on stored notifications
            rng: numpy Generator or seed for ids and seasonal picks
            clock: Callable returning the current time, defaults to datetime.now
        """
        self.repository = repository if repository is not None else InMemoryNotificationRepository()
        self.max_notifications = max_notifications
        self.rng = np.random.default_rng(rng)
        self._clock = clock or datetime.now
        self._notifications = self.repository.load()[:max_notifications]

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "NotificationCenter":
        """
        Builds a center from runtime settings.

        Notifications are kept in the JSON file at settings.notifications_path
        when one is configured, and in memory otherwise. Extra keyword
        arguments are passed to the constructor.
        """
        settings = settings or Settings.from_env()
        if settings.notifications_path is not None:
            repository = JsonFileNotificationRepository(settings.notifications_path)
        else:
            repository = InMemoryNotificationRepository()
        return cls(repository, **kwargs)

    @property
    def notifications(self) -> list[Notification]:
        return list(self._notifications)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._notifications if not n.read)

    def _set(self, notifications: list[Notification]) -> None:
        self._notifications = notifications
        self.repository.save(notifications)

    def _new_id(self, now: datetime) -> str:
        suffix = "".join(_ID_ALPHABET[i] for i in self.rng.integers(0, len(_ID_ALPHABET), size=9))
        return f"notif_{int(now.timestamp() * 1000)}_{suffix}"

    def add_notification(
        self,
        type: NotificationType,
        title: str,
        message: str,
        aqi: Optional[int] = None,
        category: Optional[AQICategory] = None,
        location: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> Notification:
        """
        Adds an unread notification at the top of the list.

        The oldest notifications beyond the cap are dropped.

        Raises:
            ValueError: If type is not a known notification type
        """
        if type not in NOTIFICATION_TYPES:
            raise ValueError(f"Unknown notification type: {type!r}")

        now = self._clock()
        notification = Notification(
            id=self._new_id(now),
            type=type,
            title=title,
            message=message,
            timestamp=now,
            read=False,
            aqi=aqi,
            category=category,
            location=location,
            icon=icon,
        )
        self._set([notification] + self._notifications[:self.max_notifications - 1])
        logger.debug("Added %s notification %s", type, notification.id)
        return notification

    def generate_aqi_alert(self, aqi: int, location: str) -> Optional[Notification]:
        """
        Raises an AQI notification for a location when air is poor or worse.

        Severe air produces an "alert"; poor and very poor produce a
        "warning". Cleaner air produces nothing.

        Returns:
            The new notification, or None when no alert was needed
        """
        category = classify(aqi)
        if not is_alert_category(category):
            return None

        if category == AQICategory.SEVERE:
            notification_type = "alert"
            title = "🚨 SEVERE Air Quality Alert"
            message = (
                f"Health emergency in {location}! AQI at {aqi}. Stay indoors, use air "
                "purifiers, and avoid all outdoor activities."
            )
        elif category == AQICategory.VERY_POOR:
            notification_type = "warning"
            title = "⚠️ Very Poor Air Quality"
            message = (
                f"Air quality in {location} is very poor (AQI: {aqi}). Sensitive groups "
                "should stay indoors. Use N95 masks if going outside."
            )
        else:
            notification_type = "warning"
            title = "⚠️ Poor Air Quality Alert"
            message = (
                f"Air quality in {location} is poor (AQI: {aqi}). Limit outdoor "
                "activities. Sensitive individuals should take precautions."
            )

        return self.add_notification(
            type=notification_type,
            title=title,
            message=message,
            aqi=aqi,
            category=category,
            location=location,
        )

    def add_seasonal_alert(self) -> Notification:
        """Adds one randomly chosen seasonal advisory."""
        alert = SEASONAL_ALERTS[int(self.rng.integers(0, len(SEASONAL_ALERTS)))]
        return self.add_notification(
            type="seasonal",
            title=f"{alert.icon} {alert.title}",
            message=alert.message,
        )

    def mark_as_read(self, notification_id: str) -> None:
        self._set([
            replace(n, read=True) if n.id == notification_id else n
            for n in self._notifications
        ])

    def mark_all_as_read(self) -> None:
        self._set([replace(n, read=True) for n in self._notifications])

    def clear_all(self) -> None:
        self._notifications = []
        self.repository.clear()
