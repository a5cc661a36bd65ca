"""
UI adapters for HazardWatch: trigger controls and user notices.
"""

from .controls import TriggerButton, TriggerEvent
from .notices import NoticeBoard, HomeAssistantNotice

__all__ = ["TriggerButton", "TriggerEvent", "NoticeBoard", "HomeAssistantNotice"]
