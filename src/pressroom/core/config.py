#!/usr/bin/env python3
"""
Pressroom configuration loader.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Final, List

from pressroom.core.constants import DEFAULT_DOCUMENT_EXT
from pressroom.core.utils import merge_dicts, load_json_file

# --- Defaults & locations --- #

DEFAULT_CONFIG: Final[Dict[str, Any]] = {
    "posts_dir": "./_posts",
    "drafts_dir": "./_drafts",
    "layout_paths": ["./_layouts"],
    "output_dir": "./_site",
    "extensions": list(DEFAULT_DOCUMENT_EXT),
    "logging": {"level": "INFO"},
}

GLOBAL_CONFIG_PATH: Final[Path] = Path.home() / ".config" / "pressroom" / "config.json"

PROJECT_CONFIG_NAME: Final[str] = "pressroom.json"


# --- Public API --- #

def load_config() -> Dict[str, Any]:
    """
    Load Pressroom configuration with layered precedence.

    Order:
        1. Built-in defaults
        2. Global config (~/.config/pressroom/config.json)
        3. Project config (./pressroom.json)
        4. Environment overrides:
           - PRESSROOM_POSTS_DIR
           - PRESSROOM_DRAFTS_DIR
           - PRESSROOM_LAYOUT_PATHS (pathsep-separated list)
           - PRESSROOM_OUTPUT_DIR
           - PRESSROOM_LOG_LEVEL

    Returns:
        A merged configuration dictionary.
    """
    # 1) start with defaults
    config = copy.deepcopy(DEFAULT_CONFIG)

    # 2) global config
    config = merge_dicts(config, load_json_file(GLOBAL_CONFIG_PATH))

    # 3) project config
    config = merge_dicts(config, load_json_file(Path.cwd() / PROJECT_CONFIG_NAME))

    # 4) environment overrides
    for key, env in (("posts_dir", "PRESSROOM_POSTS_DIR"),
                     ("drafts_dir", "PRESSROOM_DRAFTS_DIR"),
                     ("output_dir", "PRESSROOM_OUTPUT_DIR")):
        value = os.getenv(env)
        if value:
            config[key] = str(Path(value).expanduser())

    layout_paths_env = os.getenv("PRESSROOM_LAYOUT_PATHS")
    if layout_paths_env:
        config["layout_paths"] = _split_paths_env(layout_paths_env)

    log_level_env = os.getenv("PRESSROOM_LOG_LEVEL")
    if log_level_env:
        config.setdefault("logging", {})["level"] = log_level_env

    return config


# --- Internals --- #

def _split_paths_env(value: str) -> List[str]:
    """
    Split a path-list env var on os.pathsep, trimming empties and expanding '~'.

    Example:
        "a:~/b:/tmp" on Unix  -> ["a", "/home/user/b", "/tmp"] (no resolve here)
    """
    parts = [p.strip() for p in value.split(os.pathsep)]
    return [str(Path(p).expanduser()) for p in parts if p]
