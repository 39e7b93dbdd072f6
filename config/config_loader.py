import json
import os
from datetime import datetime

DEFAULT_CONFIG = {
    "tape_buffer": 50,
    "min_interval_ms": 50,
    "max_interval_ms": 1000,
    "default_speed": 500,
    "max_steps": 100_000,
    "render_window": 15,
    "log_enabled": True,
    "output_directory": "logs/",
    "log_file_prefix": "turing_"
}

# Expected types for validation
CONFIG_SCHEMA = {
    "tape_buffer": int,
    "min_interval_ms": int,
    "max_interval_ms": int,
    "default_speed": int,
    "max_steps": int,
    "render_window": int,
    "log_enabled": bool,
    "output_directory": str,
    "log_file_prefix": str
}

def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        # bool is an int subclass, so numeric keys must reject it explicitly
        value = config[key]
        if not isinstance(value, expected_type) or (expected_type is int and isinstance(value, bool)):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(value)}.")

    if config["tape_buffer"] < 1:
        raise ValueError("tape_buffer must be at least 1 cell.")
    if config["min_interval_ms"] < 0:
        raise ValueError("min_interval_ms cannot be negative.")
    if config["max_interval_ms"] < config["min_interval_ms"]:
        raise ValueError("max_interval_ms must not be smaller than min_interval_ms.")
    if config["max_steps"] < 1:
        raise ValueError("max_steps must be positive.")

def load_config(path=None, verbose=False):
    """
    Load the runtime config. Without a path the validated defaults are returned;
    with a path the JSON file is merged over the defaults.
    """
    config = DEFAULT_CONFIG.copy()

    if path is not None:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Configuration file not found at: {path}")

        with open(path, "r", encoding="utf-8") as f:
            user_config = json.load(f)

        # Merge defaults with overrides
        config.update(user_config)

    # Validate schema
    validate_config(config)

    if verbose:
        print(f"[{datetime.now()}] Loaded config:")
        for key, value in config.items():
            print(f"  {key}: {value}")

    return config

def save_config(config, path):
    validate_config(config)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=4)
