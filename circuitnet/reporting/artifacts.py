"""Run artifact helpers."""

from __future__ import annotations

import json
import platform
import time
from pathlib import Path
from typing import Mapping, Sequence

from .metrics import git_sha


def write_manifest(
    path: str | Path,
    *,
    settings: Mapping[str, object],
    topology: Sequence[str],
    network_config: str,
) -> str:
    """Write a manifest JSON file describing a training run."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    manifest = {
        "git_sha": git_sha(),
        "generated_at": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "settings": dict(settings),
        "network": {"config": network_config, "layers": list(topology)},
        "environment": {"python": platform.python_version()},
    }
    path.write_text(json.dumps(manifest, indent=2))
    return str(path)
