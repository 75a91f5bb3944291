"""Broker-agnostic publishing and handling interfaces"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class EventPublisher(ABC):
    @abstractmethod
    async def start(self) -> None: ...

    @abstractmethod
    async def stop(self) -> None: ...

    @abstractmethod
    def publish(self, topic: str, key: Optional[str], value: Dict[str, Any]) -> Any:
        """Schedule a message for delivery without waiting for the broker"""


class EventHandler(ABC):
    @abstractmethod
    async def handle(self, key: Optional[str], value: Dict[str, Any]) -> None: ...
