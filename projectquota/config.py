from pathlib import Path

import yaml

DEFAULT_CONFIG = Path(__file__).parent / "config.yaml"


def _merge(base, override):
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path=None):
    """Load the default config, with the file at ``path`` merged over it."""
    with open(DEFAULT_CONFIG) as f:
        config = yaml.safe_load(f)
    if path:
        with open(path) as f:
            config = _merge(config, yaml.safe_load(f) or {})
    return config
