"""
Settings for a setup run, read from config.json.
"""

import json
from pathlib import Path

CONFIG_FILENAME = "config.json"

DEFAULT_CONFIG = {
    "project_file": None,  # relative to the config directory; searched for when unset
    "target_name": None,  # defaults to the project name
    "source_directory": None,  # defaults to the project name
    "view_directory": "View",
    "layouts_directory": "Layouts",
    "styles_directory": "Styles",
    "bindings_directory": "Bindings",
    "core_directory": "Core",
    "use_network": False,  # adds SimpleApiNetwork
    "packages": [],  # extra Swift packages: name, repository_url, minimum_version[, product_name]
}


def load_config(base_dir: Path) -> dict:
    """Defaults overlaid with base_dir/config.json when it exists."""
    config = dict(DEFAULT_CONFIG)
    path = Path(base_dir) / CONFIG_FILENAME

    if not path.exists():
        return config

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")

    config.update(data)
    return config
