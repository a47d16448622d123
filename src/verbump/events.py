from __future__ import annotations

import time

from blinker import Namespace

RUN_STARTED = "run.started"
FILE_REWRITTEN = "file.rewritten"
FILE_SKIPPED = "file.skipped"
METADATA_REWRITTEN = "metadata.rewritten"
METADATA_UNCHANGED = "metadata.unchanged"
RUN_FINISHED = "run.finished"

_ns = Namespace()


def now_ms() -> int:
    return int(time.time() * 1000)


def signal(name: str):
    return _ns.signal(name)


def emit(signal_name: str, /, **payload):
    msg = dict(payload)
    msg.setdefault("ts", now_ms())
    return signal(signal_name).send(None, event=signal_name, **msg)
