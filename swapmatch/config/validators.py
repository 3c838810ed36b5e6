"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for settings that are valid but likely unintended.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    matching = config_dict.get("matching", {})
    if not isinstance(matching, dict):
        return warning_messages

    threshold = matching.get("similarity_threshold")
    if isinstance(threshold, (int, float)) and threshold < 0.3:
        warning_messages.append(
            f"Low similarity_threshold ({threshold}) will pair loosely related postings"
        )

    min_confidence = matching.get("min_confidence")
    if isinstance(min_confidence, (int, float)) and min_confidence > 0.9:
        warning_messages.append(
            f"High min_confidence ({min_confidence}) will drop almost every candidate"
        )

    chain = matching.get("chain", {})
    if isinstance(chain, dict) and chain.get("enabled"):
        max_length = chain.get("max_length", 4)
        if isinstance(max_length, int) and max_length > 4:
            warning_messages.append(
                f"Chain search up to {max_length} users grows combinatorially with the listing pool"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
