#!/usr/bin/env python3
"""
Purpose:
    Generic helpers shared by the configuration layer: dictionary merge and
    JSON file loading.
"""

import json
from pathlib import Path
from typing import Dict, Any

from pressroom.core.constants import DEFAULT_TEXT_ENCODING


# --- Generic Utilities --- #

def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two dictionaries (values from 'override' take precedence).
    Non-dict values are overwritten; dict values are merged depth-first.
    """
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


# --- File I/O Helpers --- #

def load_json_file(path: Path) -> Dict[str, Any]:
    """
    Load a JSON object from 'path'. Returns an empty dict if the file is missing.

    Raises:
        ValueError: if the file exists but is not a valid JSON object.
    """
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding=DEFAULT_TEXT_ENCODING) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in {str(path)!r}: {e.msg} (line {e.lineno}, col {e.colno})"
        ) from e
    if not isinstance(data, dict):
        raise ValueError(f"Invalid config in {str(path)!r}: expected a JSON object")
    return data
