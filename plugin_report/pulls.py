"""Open documentation-migration pull requests, keyed by plugin."""

import json
from pathlib import Path


def load_pulls(filepath: Path) -> dict[str, int]:
    """Load the plugin key -> pull request number mapping from a JSON file."""
    if not filepath.exists():
        print(f"Warning: {filepath} not found, no pull requests will be linked")
        return {}

    with open(filepath) as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{filepath}: expected a JSON object of plugin -> PR number")

    pulls = {}
    for key, number in data.items():
        if isinstance(number, bool) or not isinstance(number, int):
            raise ValueError(f"{filepath}: PR number for {key!r} is not an integer")
        pulls[key] = number

    return pulls
