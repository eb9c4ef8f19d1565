from __future__ import annotations

import importlib.util
import io
import json
import sys
from pathlib import Path
from types import ModuleType

from packets import digest_packet, proximity_packet

from pydiract import DirActConfig


def _load_script() -> ModuleType:
    path = Path(__file__).resolve().parent.parent / "scripts" / "digest_raddecs.py"
    spec = importlib.util.spec_from_file_location("digest_raddecs", path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


def test_replay_writes_json_lines() -> None:
    script = _load_script()
    lines = [
        json.dumps({"packets": [proximity_packet().hex()], "timestamp": 1}),
        "",
        "garbage",
        "[1, 2]",
        json.dumps({"packets": "ff830511"}),
        json.dumps({"packets": [digest_packet(is_last_page=True, entries=[("00000001", 9)]).hex()], "timestamp": 2}),
    ]
    out = io.StringIO()

    written = script.replay(lines, DirActConfig(), out)

    records = [json.loads(line) for line in out.getvalue().splitlines()]
    assert written == 2
    assert records[0]["type"] == "proximity"
    assert records[0]["instanceId"] == "12345678"
    assert records[1]["type"] == "digest"
    assert records[1]["interactions"] == [{"instanceId": "00000001", "count": 9}]
    assert records[1]["timestamp"] == 2
