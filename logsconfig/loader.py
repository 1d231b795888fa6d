"""Build source configs from raw mappings and YAML text, and back.

Key names follow the external config format (``start_position``,
``log_processing_rules``, ...). Reading files is left to the caller.
"""

from __future__ import annotations

import logging
import queue
from dataclasses import fields
from typing import Any, Optional, Union

import yaml

from logsconfig.errors import SourceFormatError, UnsupportedTypeError
from logsconfig.processing_rules import ProcessingRule
from logsconfig.settings import Settings
from logsconfig.sources import (
    SOURCE_CLASSES,
    ChannelSource,
    SourceConfig,
    SourceType,
)

logger = logging.getLogger(__name__)

# field name -> external key, where they differ
_KEY_NAMES = {
    "tailing_mode": "start_position",
    "auto_multi_line": "auto_multi_line_detection",
    "processing_rules": "log_processing_rules",
}

_INT_FIELDS = {"port", "auto_multi_line_sample_size"}
_FLOAT_FIELDS = {"auto_multi_line_match_threshold"}
_BOOL_FIELDS = {"auto_multi_line", "container_mode"}
_LIST_FIELDS = {"tags", "exclude_paths"}
_SET_FIELDS = {"include_units", "exclude_units"}

_RULE_KEYS = ("type", "name", "pattern", "replace_placeholder")

# never read from or written to raw config
_INTERNAL_FIELDS = {"channel"}


def _key(name: str) -> str:
    return _KEY_NAMES.get(name, name)


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def _to_str(value: Any) -> str:
    return "" if value is None else str(value)


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("expected an integer, got a boolean")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError("expected a whole number")
    return int(value)


def _to_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(item) for item in value]


def _to_rules(value: Any) -> list[ProcessingRule]:
    rules = []
    for raw in value or []:
        if not isinstance(raw, dict):
            raise SourceFormatError(
                f"processing rule must be a mapping, got {type(raw).__name__}"
            )
        rules.append(ProcessingRule(**{k: _to_str(raw.get(k)) for k in _RULE_KEYS}))
    return rules


def _coerce(name: str, value: Any) -> Any:
    try:
        if name in _INT_FIELDS:
            return _to_int(value)
        if name in _FLOAT_FIELDS:
            return float(value)
        if name in _BOOL_FIELDS:
            return _to_bool(value)
        if name in _LIST_FIELDS:
            return _to_list(value)
        if name in _SET_FIELDS:
            return set(_to_list(value))
        if name == "processing_rules":
            return _to_rules(value)
    except (TypeError, ValueError) as exc:
        raise SourceFormatError(f"invalid value {value!r} for '{_key(name)}': {exc}") from exc
    return _to_str(value)


def source_from_dict(
    data: dict,
    channel: Optional[queue.Queue] = None,
    settings: Optional[Settings] = None,
) -> SourceConfig:
    """Build the source config matching ``data["type"]``.

    A missing or empty type gives a plain SourceConfig, which validation
    rejects until a type is assigned. Keys the declared type does not use
    are dropped.

    Args:
        data: Raw config mapping, e.g. one entry of a ``logs:`` section.
        channel: Caller-owned queue, only for ``string_channel`` sources.
        settings: Controls warnings about dropped keys.

    Raises:
        UnsupportedTypeError: If the type is not a known source type.
        SourceFormatError: If a value cannot be converted.
    """
    settings = settings or Settings.from_env()

    source_type = str(data.get("type") or "")
    if source_type:
        cls = SOURCE_CLASSES.get(source_type)
        if cls is None:
            raise UnsupportedTypeError(f"unsupported source type '{source_type}'")
    else:
        cls = SourceConfig

    if channel is not None and cls is not ChannelSource:
        raise SourceFormatError(
            f"a channel can only be attached to a {SourceType.STRING_CHANNEL.value} source"
        )

    kwargs = {}
    known = {"type"}
    for f in fields(cls):
        if f.name in _INTERNAL_FIELDS:
            continue
        key = _key(f.name)
        known.add(key)
        if key in data:
            kwargs[f.name] = _coerce(f.name, data[key])

    ignored = sorted(set(data) - known)
    if ignored and settings.warn_unknown_keys:
        logger.warning(
            "Ignoring key(s) %s not used by %s source",
            ", ".join(map(str, ignored)), source_type or "untyped",
        )

    if channel is not None:
        kwargs["channel"] = channel
    return cls(**kwargs)


def source_to_dict(config: SourceConfig) -> dict:
    """Convert a source config to a plain mapping using external key names.

    The in-process channel is never included.
    """
    data: dict[str, Any] = {}
    if config.type:
        data["type"] = config.type

    for f in fields(config):
        if f.name in _INTERNAL_FIELDS:
            continue
        value = getattr(config, f.name)
        if f.name in _SET_FIELDS:
            value = sorted(value)
        elif f.name == "processing_rules":
            value = [{k: getattr(rule, k) for k in _RULE_KEYS} for rule in value]
        elif isinstance(value, list):
            value = list(value)
        data[_key(f.name)] = value
    return data


def parse_sources(text: str, settings: Optional[Settings] = None) -> list[SourceConfig]:
    """Parse YAML text holding a list of sources.

    Accepts either a top-level ``logs:`` key or a bare list. Empty text
    yields no sources.

    Raises:
        SourceFormatError: If the YAML is malformed or not shaped as a list
            of mappings.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SourceFormatError(f"invalid YAML: {exc}") from exc

    if data is None:
        return []
    if isinstance(data, dict):
        if "logs" not in data:
            raise SourceFormatError(
                f"expected a 'logs' key, got {', '.join(map(str, data)) or 'an empty mapping'}"
            )
        data = data["logs"] or []
    if not isinstance(data, list):
        raise SourceFormatError(
            f"expected a list of sources, got {type(data).__name__}"
        )

    sources = []
    for entry in data:
        if not isinstance(entry, dict):
            raise SourceFormatError(
                f"source must be a mapping, got {type(entry).__name__}"
            )
        sources.append(source_from_dict(entry, settings=settings))
    logger.info("Loaded %d source(s)", len(sources))
    return sources


def assign_type(
    config: SourceConfig,
    source_type: Union[SourceType, str],
    **kwargs: Any,
) -> SourceConfig:
    """Return a config of *source_type* carrying the shared fields of *config*.

    Used when discovery metadata decides the type of a config that was
    declared without one. Type-specific fields are passed as keyword
    arguments.

    Raises:
        UnsupportedTypeError: If *source_type* is not a known source type.
    """
    tag = source_type.value if isinstance(source_type, SourceType) else source_type
    cls = SOURCE_CLASSES.get(tag)
    if cls is None:
        raise UnsupportedTypeError(f"unsupported source type '{tag}'")

    shared = {f.name: getattr(config, f.name) for f in fields(SourceConfig)}
    shared.update(kwargs)
    return cls(**shared)
