"""
Trigger controls for HazardWatch.

A button-like control: handlers register for clicks, and every
click dispatches one fresh event whose default action a handler
may suppress.
"""

import inspect
from typing import Any, Awaitable, Callable, List, Union
from hazardwatch.observability.logging_setup import get_logger

log = get_logger("hazardwatch.controls")

class TriggerEvent:
    """클릭 이벤트"""

    def __init__(self, source: str):
        self.source = source
        self.default_prevented = False
        self.results: List[Any] = []

    def prevent_default(self) -> None:
        """기본 동작(페이지 이동 등)을 막습니다."""
        self.default_prevented = True

ClickHandler = Callable[[TriggerEvent], Union[Any, Awaitable[Any]]]

class TriggerButton:
    """클릭 핸들러 등록이 가능한 버튼"""

    def __init__(self, name: str):
        self.name = name
        self._handlers: List[ClickHandler] = []

    def on_click(self, handler: ClickHandler) -> None:
        """클릭 핸들러를 등록합니다. 같은 핸들러는 한 번만 등록됩니다."""
        if handler in self._handlers:
            log.debug(f"이미 등록된 핸들러 무시 button:{self.name}")
            return
        self._handlers.append(handler)

    async def click(self) -> TriggerEvent:
        """
        클릭을 발생시킵니다.

        Returns:
            핸들러들이 처리한 이벤트 (default_prevented 확인용)
        """
        event = TriggerEvent(self.name)
        for handler in list(self._handlers):
            result = handler(event)
            if inspect.isawaitable(result):
                result = await result
            event.results.append(result)
        if not event.default_prevented:
            log.debug(f"기본 동작이 막히지 않음 button:{self.name}")
        return event
