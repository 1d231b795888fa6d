"""Log source configs, one dataclass per source type.

SourceConfig holds the fields every source shares (routing, tags, processing
rules) and, used on its own, stands for a config whose type has not been set
yet. Each subclass adds only the fields its source type reads.
"""

from __future__ import annotations

import queue
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional

from logsconfig.processing_rules import ProcessingRule


class SourceType(Enum):
    TCP = "tcp"
    UDP = "udp"
    FILE = "file"
    DOCKER = "docker"
    JOURNALD = "journald"
    WINDOWS_EVENT = "windows_event"
    SNMP_TRAPS = "snmp_traps"
    STRING_CHANNEL = "string_channel"


SOURCE_TYPES = frozenset(t.value for t in SourceType)

# File encodings other than the default UTF-8
UTF16BE = "utf-16-be"
UTF16LE = "utf-16-le"
GB18030 = "gb18030"
GB2312 = "gb2312"
HZGB2312 = "hz-gb2312"
GBK = "gbk"
BIG5 = "big5"

ENCODINGS = (UTF16BE, UTF16LE, GB18030, GB2312, HZGB2312, GBK, BIG5)

WILDCARD_CHARS = "*?["


def contains_wildcard(path: str) -> bool:
    """Return True if *path* contains any glob wildcard character."""
    return any(c in path for c in WILDCARD_CHARS)


@dataclass
class ChannelMessage:
    content: bytes
    timestamp: Optional[str] = None


@dataclass
class SourceConfig:
    type: ClassVar[str] = ""

    service: str = ""
    source: str = ""
    source_category: str = ""
    tags: list[str] = field(default_factory=list)
    processing_rules: list[ProcessingRule] = field(default_factory=list)


@dataclass
class NetworkSource(SourceConfig):
    port: int = 0
    idle_timeout: str = ""


@dataclass
class TCPSource(NetworkSource):
    type: ClassVar[str] = SourceType.TCP.value


@dataclass
class UDPSource(NetworkSource):
    type: ClassVar[str] = SourceType.UDP.value


@dataclass
class FileSource(SourceConfig):
    type: ClassVar[str] = SourceType.FILE.value

    path: str = ""
    encoding: str = ""
    exclude_paths: list[str] = field(default_factory=list)
    tailing_mode: str = ""  # start_position
    auto_multi_line: bool = False
    auto_multi_line_sample_size: int = 0
    auto_multi_line_match_threshold: float = 0.0


@dataclass
class JournaldSource(SourceConfig):
    type: ClassVar[str] = SourceType.JOURNALD.value

    path: str = ""
    include_units: set[str] = field(default_factory=set)
    exclude_units: set[str] = field(default_factory=set)
    container_mode: bool = False


@dataclass
class DockerSource(SourceConfig):
    type: ClassVar[str] = SourceType.DOCKER.value

    image: str = ""
    label: str = ""
    name: str = ""
    identifier: str = ""  # container id


@dataclass
class WindowsEventSource(SourceConfig):
    type: ClassVar[str] = SourceType.WINDOWS_EVENT.value

    channel_path: str = ""
    query: str = ""


@dataclass
class SnmpTrapsSource(SourceConfig):
    type: ClassVar[str] = SourceType.SNMP_TRAPS.value


@dataclass
class ChannelSource(SourceConfig):
    """Source fed by an in-process queue of ChannelMessage.

    The queue belongs to the caller: this config only borrows it, never
    closes or copies it, and leaves it out of comparisons and serialization.
    """

    type: ClassVar[str] = SourceType.STRING_CHANNEL.value

    channel: Optional[queue.Queue] = field(default=None, compare=False, repr=False)


SOURCE_CLASSES: dict[str, type[SourceConfig]] = {
    cls.type: cls
    for cls in (
        TCPSource,
        UDPSource,
        FileSource,
        DockerSource,
        JournaldSource,
        WindowsEventSource,
        SnmpTrapsSource,
        ChannelSource,
    )
}
