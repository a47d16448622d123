import pytest

from perl_files import FOO_BAR_PM, FOO_PM, FOO_POD, FOO_SCRIPT, MAKEFILE_PL
from verbump import events

ALL_EVENTS = (
    events.RUN_STARTED,
    events.FILE_REWRITTEN,
    events.FILE_SKIPPED,
    events.METADATA_REWRITTEN,
    events.METADATA_UNCHANGED,
    events.RUN_FINISHED,
)


@pytest.fixture
def captured_events():
    # blinker holds receivers weakly, keep them alive for the duration of the test
    captured = []
    receivers = []
    for name in ALL_EVENTS:
        def receiver(_sender, **kw):
            captured.append(kw)

        events.signal(name).connect(receiver)
        receivers.append((name, receiver))
    yield captured
    for name, receiver in receivers:
        events.signal(name).disconnect(receiver)


@pytest.fixture
def perl_dist(tmp_path, monkeypatch):
    """A small distribution checkout, with the cwd set to its root."""
    (tmp_path / "lib" / "Foo").mkdir(parents=True)
    (tmp_path / "bin").mkdir()
    (tmp_path / "lib" / "Foo.pm").write_text(FOO_PM)
    (tmp_path / "lib" / "Foo" / "Bar.pm").write_text(FOO_BAR_PM)
    (tmp_path / "lib" / "Foo.pod").write_text(FOO_POD)
    (tmp_path / "bin" / "foo").write_text(FOO_SCRIPT)
    (tmp_path / "bin" / "foo").chmod(0o755)
    (tmp_path / "Makefile.PL").write_text(MAKEFILE_PL)
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("V", raising=False)
    return tmp_path
