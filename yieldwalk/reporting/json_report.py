from __future__ import annotations

import json
from typing import TextIO

from ..summary import WalkSummary


def generate_json(summary: WalkSummary) -> str:
    payload = {
        "source": summary.source,
        "kinds": summary.kinds,
        "counts": summary.counts,
        "max_depth": summary.max_depth,
    }
    return json.dumps(payload, indent=2)


def write_json(summary: WalkSummary, stream: TextIO) -> None:
    stream.write(generate_json(summary))
    stream.write("\n")
