"""
storefront/client/notices.py - The single toast the UI shows.

A new notice replaces the previous one. Renderers subscribe to be told when it changes.
"""
import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Literal, Optional

logger = logging.getLogger("storefront.client.notices")

NoticeKind = Literal["info", "success", "error"]

HISTORY_SIZE = 50


@dataclass(frozen=True)
class Notice:
    message: str
    kind: NoticeKind = "info"


class NoticeBoard:
    def __init__(self) -> None:
        self.current: Optional[Notice] = None
        self.history: Deque[Notice] = deque(maxlen=HISTORY_SIZE)
        self._listeners: List[Callable[[Notice], None]] = []

    def subscribe(self, listener: Callable[[Notice], None]) -> None:
        self._listeners.append(listener)

    def show(self, message: str, kind: NoticeKind = "info") -> Notice:
        notice = Notice(message, kind)
        self.current = notice
        self.history.append(notice)
        if kind == "error":
            logger.info("notice(error): %s", message)
        for listener in self._listeners:
            listener(notice)
        return notice

    def info(self, message: str) -> Notice:
        return self.show(message, "info")

    def success(self, message: str) -> Notice:
        return self.show(message, "success")

    def error(self, message: str) -> Notice:
        return self.show(message, "error")
