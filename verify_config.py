#!/usr/bin/env python3
"""Simple script to verify config.example.yaml structure without the package installed."""

import yaml
from pathlib import Path

RATIO_KEYS = ("similarity_threshold", "min_confidence")
BLEND_KEYS = ("similarity", "trust", "experience")


def verify_config_structure(config_file: Path = Path("config.example.yaml")) -> bool:
    """Verify config.example.yaml has the expected structure."""
    if not config_file.exists():
        print(f"✗ {config_file} not found")
        return False

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        print(f"✗ Failed to parse {config_file}: {e}")
        return False

    if not isinstance(config, dict):
        print(f"✗ {config_file} must contain a mapping at the top level")
        return False

    errors = []

    # Check matching structure
    matching = config.get("matching", {})
    if not isinstance(matching, dict):
        errors.append("'matching' must be a dictionary")
        matching = {}

    for key in RATIO_KEYS:
        value = matching.get(key)
        if value is not None and not (isinstance(value, (int, float)) and 0 <= value <= 1):
            errors.append(f"matching.{key} must be a number between 0 and 1")

    max_results = matching.get("max_results")
    if max_results is not None and not (isinstance(max_results, int) and max_results >= 1):
        errors.append("matching.max_results must be a positive integer")

    confidence = matching.get("confidence", {})
    if not isinstance(confidence, dict):
        errors.append("matching.confidence must be a dictionary")
    elif all(key in confidence for key in BLEND_KEYS):
        total = sum(confidence[key] for key in BLEND_KEYS)
        if abs(total - 1.0) > 1e-6:
            errors.append(f"matching.confidence weights must sum to 1.0, got {total}")

    chain = matching.get("chain", {})
    if not isinstance(chain, dict):
        errors.append("matching.chain must be a dictionary")
    elif "max_length" in chain and chain["max_length"] not in range(3, 7):
        errors.append("matching.chain.max_length must be between 3 and 6")

    # Check logging structure
    logging_section = config.get("logging", {})
    if not isinstance(logging_section, dict):
        errors.append("'logging' must be a dictionary")
    elif logging_section.get("format", "key-value") not in ("json", "key-value"):
        errors.append("logging.format must be 'json' or 'key-value'")

    if errors:
        print(f"✗ {config_file} validation failed:")
        for error in errors:
            print(f"  - {error}")
        return False

    print(f"✓ {config_file} structure is valid")
    print(f"  - Similarity threshold: {matching.get('similarity_threshold', 0.5)}")
    print(f"  - Minimum confidence: {matching.get('min_confidence', 0.4)}")
    print(f"  - Max results: {matching.get('max_results', 10)}")
    print(f"  - Chain search: {'enabled' if chain.get('enabled') else 'disabled'}")
    return True


if __name__ == "__main__":
    import sys
    success = verify_config_structure()
    sys.exit(0 if success else 1)
