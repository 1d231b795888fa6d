"""Processing rules: per-source regex rules applied to log lines.

Rules are checked by validate_processing_rules() and then turned into their
executable form by compile_processing_rules(). The source validator calls
both, in that order, once per validation pass.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)

EXCLUDE_AT_MATCH = "exclude_at_match"
INCLUDE_AT_MATCH = "include_at_match"
MASK_SEQUENCES = "mask_sequences"
MULTI_LINE = "multi_line"

RULE_TYPES = (EXCLUDE_AT_MATCH, INCLUDE_AT_MATCH, MASK_SEQUENCES, MULTI_LINE)


class ProcessingRuleError(Exception):
    """Raised when a processing rule is malformed or fails to compile."""


@dataclass
class ProcessingRule:
    type: str = ""
    name: str = ""
    pattern: str = ""
    replace_placeholder: str = ""
    # compiled state, filled in by compile_processing_rules()
    regex: Optional[re.Pattern] = field(default=None, compare=False, repr=False)
    placeholder: bytes = field(default=b"", compare=False, repr=False)


def validate_processing_rules(rules: list[ProcessingRule]) -> None:
    """Check the shape of every rule, stopping at the first bad one.

    Raises:
        ProcessingRuleError: If a rule has no name, no or an unknown type,
            no pattern, or a pattern that is not a valid regex.
    """
    for rule in rules:
        if not rule.name:
            raise ProcessingRuleError("all processing rules must have a name")

        if not rule.type:
            raise ProcessingRuleError(
                f"type must be set for processing rule `{rule.name}`"
            )
        if rule.type not in RULE_TYPES:
            raise ProcessingRuleError(
                f"type {rule.type} is not supported for processing rule `{rule.name}`"
            )

        if not rule.pattern:
            raise ProcessingRuleError(
                f"no pattern provided for processing rule: {rule.name}"
            )
        try:
            re.compile(rule.pattern)
        except re.error as exc:
            raise ProcessingRuleError(
                f"invalid pattern {rule.pattern} for processing rule: {rule.name}"
            ) from exc


def compile_processing_rules(rules: list[ProcessingRule]) -> None:
    """Compile each rule's pattern in place.

    - exclude_at_match / include_at_match: ``regex`` is the pattern.
    - mask_sequences: ``regex`` is the pattern, ``placeholder`` the UTF-8
      bytes of ``replace_placeholder``.
    - multi_line: ``regex`` is the pattern anchored at the start of a line.
    """
    for rule in rules:
        source = "^" + rule.pattern if rule.type == MULTI_LINE else rule.pattern
        try:
            rule.regex = re.compile(source)
        except re.error as exc:
            raise ProcessingRuleError(
                f"could not compile pattern {rule.pattern} for processing rule: {rule.name}"
            ) from exc

        if rule.type == MASK_SEQUENCES:
            rule.placeholder = rule.replace_placeholder.encode("utf-8")

    logger.debug("Compiled %d processing rule(s)", len(rules))
