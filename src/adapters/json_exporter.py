"""JSON export of resolution results.

Failed lines are exported too (with `error` / `error_kind`), so the file is a
complete record of the run.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from core.domain.models import ModuleResolution


def export_resolutions_json(*, resolutions: Sequence[ModuleResolution], output_path: Path) -> Path:
    """Write resolutions to UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "modules": [r.model_dump(mode="json") for r in resolutions],
        "resolved": sum(1 for r in resolutions if r.ok),
        "failed": sum(1 for r in resolutions if not r.ok),
    }
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
