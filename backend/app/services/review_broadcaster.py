"""
新评价推送

每个温泉对应一个频道 onsen_{id}_reviews，WebSocket 客户端订阅后会收到新评价。
推送为尽力而为：至多一次，失败只记录日志，不重试。
"""
import logging
from typing import Any, Dict, List, Protocol

logger = logging.getLogger(__name__)


class Subscriber(Protocol):
    async def send_json(self, data: Any) -> None: ...


def channel_name(onsen_id: int) -> str:
    return f"onsen_{onsen_id}_reviews"


class ReviewBroadcaster:
    """内存订阅表（单进程）"""

    def __init__(self):
        self._channels: Dict[str, List[Subscriber]] = {}

    def subscribe(self, onsen_id: int, subscriber: Subscriber) -> None:
        self._channels.setdefault(channel_name(onsen_id), []).append(subscriber)

    def unsubscribe(self, onsen_id: int, subscriber: Subscriber) -> None:
        subscribers = self._channels.get(channel_name(onsen_id))
        if not subscribers:
            return
        if subscriber in subscribers:
            subscribers.remove(subscriber)
        if not subscribers:
            self._channels.pop(channel_name(onsen_id), None)

    def subscriber_count(self, onsen_id: int) -> int:
        return len(self._channels.get(channel_name(onsen_id), []))

    async def broadcast(self, onsen_id: int, payload: Dict[str, Any]) -> int:
        """向频道内所有订阅者发送，返回成功数量"""
        channel = channel_name(onsen_id)
        delivered = 0
        for subscriber in list(self._channels.get(channel, [])):
            try:
                await subscriber.send_json({"channel": channel, "review": payload})
                delivered += 1
            except Exception as e:
                logger.warning("review broadcast to %s failed: %s", channel, e)
                self.unsubscribe(onsen_id, subscriber)
        return delivered


review_broadcaster = ReviewBroadcaster()
