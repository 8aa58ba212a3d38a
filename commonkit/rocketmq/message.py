"""Messages sent to and received from RocketMQ."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

MSG_BODY_FOR_CREATE_TOPIC = "{Message body for create topic.}"
"""Body of the marker message used to create a topic; consumers skip it."""


def _go_list(items: list[str]) -> str:
    return "[" + " ".join(items) + "]"


def _go_map(mapping: dict[str, str]) -> str:
    return "map[" + " ".join(f"{key}:{mapping[key]}" for key in sorted(mapping)) + "]"


@dataclass
class Message:
    """A message to produce: topic, tag, keys, body and user properties."""

    topic: str = ""
    tags: str = ""
    keys: list[str] = field(default_factory=list)
    body: bytes = b""
    properties: dict[str, str] = field(default_factory=dict)

    def is_create_topic(self) -> bool:
        """True if this is the marker message sent to create a topic."""
        return self.body == MSG_BODY_FOR_CREATE_TOPIC.encode("utf-8")

    def __str__(self) -> str:
        body = self.body.decode("utf-8", "replace")
        return (
            f"[rocketrmq]Topic: {self.topic}, tags: {self.tags}, "
            f"keys: {_go_list(self.keys)}, body: {body}, "
            f"property: {_go_map(self.properties)}."
        )


@dataclass
class MessageExt(Message):
    """A consumed message with the broker's storage metadata."""

    msg_id: str = ""
    offset_msg_id: str = ""
    store_size: int = 0
    queue_offset: int = 0
    sys_flag: int = 0
    born_timestamp: int = 0
    born_host: str = ""
    store_timestamp: int = 0
    store_host: str = ""
    commit_log_offset: int = 0
    body_crc: int = 0
    reconsume_times: int = 0
    prepared_transaction_offset: int = 0

    def __str__(self) -> str:
        return (
            f"[rocketrmq]Message={Message.__str__(self)}, MsgId={self.msg_id}, "
            f"OffsetMsgId={self.offset_msg_id}, StoreSize={self.store_size}, "
            f"QueueOffset={self.queue_offset}, SysFlag={self.sys_flag}, "
            f"BornTimestamp={self.born_timestamp}, BornHost='{self.born_host}', "
            f"StoreTimestamp={self.store_timestamp}, StoreHost='{self.store_host}', "
            f"CommitLogOffset={self.commit_log_offset}, BodyCRC={self.body_crc}, "
            f"ReconsumeTimes={self.reconsume_times}, "
            f"PreparedTransactionOffset={self.prepared_transaction_offset}."
        )


MessageExtHandler = Callable[[MessageExt], None]
"""Handles one consumed message; raising an exception marks it as failed."""