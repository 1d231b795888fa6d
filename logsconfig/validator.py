"""Validate a log source config before it is handed to a tailer."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from logsconfig.errors import (
    ConfigError,
    InvalidTailingModeError,
    MissingPathError,
    MissingPortError,
    MissingTypeError,
    UnsupportedTypeError,
    WildcardTailingError,
)
from logsconfig.processing_rules import (
    ProcessingRule,
    ProcessingRuleError,
    compile_processing_rules,
    validate_processing_rules,
)
from logsconfig.sources import (
    SOURCE_TYPES,
    FileSource,
    NetworkSource,
    SourceConfig,
    TCPSource,
    UDPSource,
    contains_wildcard,
)
from logsconfig.tailing import starts_from_beginning, tailing_mode_from_string

logger = logging.getLogger(__name__)

RulesHook = Callable[[list[ProcessingRule]], None]


def _check_file(config: FileSource) -> None:
    if not config.path:
        raise MissingPathError("file source must have a path")

    mode, found = tailing_mode_from_string(config.tailing_mode)
    if not found and config.tailing_mode != "":
        raise InvalidTailingModeError(
            f"invalid tailing mode '{config.tailing_mode}' for {config.path}"
        )
    if contains_wildcard(config.path) and starts_from_beginning(mode):
        raise WildcardTailingError(
            f"tailing from the beginning is not supported for wildcard path {config.path}"
        )


def _check_port(config: NetworkSource) -> None:
    if config.port == 0:
        raise MissingPortError(f"{config.type} source must have a port")


# Source types missing from this table have no structural checks here.
_STRUCTURAL_CHECKS: dict[type, Callable] = {
    FileSource: _check_file,
    TCPSource: _check_port,
    UDPSource: _check_port,
}


def validate(
    config: SourceConfig,
    validate_rules: RulesHook = validate_processing_rules,
    compile_rules: RulesHook = compile_processing_rules,
) -> None:
    """Raise on the first problem found in *config*; return None if it is usable.

    Checks run in order: type, per-type structure (file path and tailing
    mode, tcp/udp port), then the processing rules through *validate_rules*
    and, only if those pass, *compile_rules*. Errors from the two rule hooks
    are propagated as raised. Compiling may store compiled state on the
    rule objects; the config itself is not modified.

    Raises:
        ConfigError: For a structural problem in the config.
    """
    if not config.type:
        # An autodiscovery label may omit the type; it must be overridden
        # before validation, so reaching here means the override was missed.
        raise MissingTypeError("a config must have a type")
    if config.type not in SOURCE_TYPES:
        raise UnsupportedTypeError(f"unsupported source type '{config.type}'")

    declared = type(config).type
    if config.type != declared:
        raise UnsupportedTypeError(
            f"source type '{config.type}' does not match {type(config).__name__} '{declared}'"
        )

    for cls in type(config).__mro__:
        check = _STRUCTURAL_CHECKS.get(cls)
        if check is not None:
            check(config)
            break

    validate_rules(config.processing_rules)
    compile_rules(config.processing_rules)
    logger.debug("Validated %s source %r", config.type, config.source or config.service)


def filter_valid_sources(configs: Iterable[SourceConfig]) -> list[SourceConfig]:
    """Validate each config and keep the usable ones, in their original order.

    A rejected config is logged and skipped; it does not stop the others.
    """
    valid = []
    rejected = 0
    for config in configs:
        try:
            validate(config)
        except (ConfigError, ProcessingRuleError) as exc:
            rejected += 1
            logger.warning(
                "Skipping %s source %r: %s",
                config.type or "untyped", config.source or config.service, exc,
            )
            continue
        valid.append(config)

    logger.info("%d of %d source(s) passed validation", len(valid), len(valid) + rejected)
    return valid
