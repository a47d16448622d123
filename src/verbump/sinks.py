from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from . import events, rewriter
from .util import log

Disconnect = Callable[[], None]


class BaseSink:
    def __init__(self):
        self._disconnects: list[Disconnect] = []

    def _connect(self, signal_name: str, receiver):
        sig = events.signal(signal_name)
        sig.connect(receiver)
        self._disconnects.append(lambda: sig.disconnect(receiver))

    def close(self):
        for disconnect in reversed(self._disconnects):
            disconnect()
        self._disconnects.clear()


class LogSink(BaseSink):
    """Writes a line per file outcome to the log, plus a summary at the end."""

    def install(self):
        self._connect(events.RUN_STARTED, self._on_run_started)
        self._connect(events.FILE_REWRITTEN, self._on_file_rewritten)
        self._connect(events.FILE_SKIPPED, self._on_file_skipped)
        self._connect(events.METADATA_REWRITTEN, self._on_metadata_rewritten)
        self._connect(events.RUN_FINISHED, self._on_run_finished)
        return self

    def _on_run_started(self, _sender, **kw):
        log.adjust_col_width(kw.get("names") or [])
        log.debug(f"bumping {kw.get('version')} -> {kw.get('next_version')}")

    def _on_file_rewritten(self, _sender, **kw):
        log.debug(f"bumped $VERSION in {kw.get('original_name')}")

    def _on_file_skipped(self, _sender, **kw):
        name, reason = kw.get("name"), kw.get("reason")
        match reason:
            case rewriter.SKIPPED_POD_ONLY:
                log.debug(f'Skipping: "{name}" is pod only')
            case rewriter.SKIPPED_NOT_FOUND:
                log.debug(f'Skipping: "{name}" not found in source')
            case rewriter.SKIPPED_NO_MATCH:
                log.info(f"Skipping: no \"our $VERSION = '...'\" found in \"{name}\"")
            case _:
                # binary files are skipped silently
                pass

    def _on_metadata_rewritten(self, _sender, **kw):
        log.debug(f"bumped VERSION in {kw.get('name')}")

    def _on_run_finished(self, _sender, **kw):
        report = kw.get("report")
        if report is None:
            return
        if log.is_debug_enabled():
            for name, outcome in report.files:
                log.debug(f"{log.format_name(name)} {outcome}")
        log.info(
            f"Bumped {len(report.rewritten())} of {len(report.files)} files "
            f"to {report.next_version}"
        )


@dataclass
class SinkInstallation:
    sinks: list[BaseSink] = field(default_factory=list)

    def close(self):
        for sink in reversed(self.sinks):
            sink.close()


def install_sinks() -> SinkInstallation:
    installation = SinkInstallation()
    installation.sinks.append(LogSink().install())
    return installation
