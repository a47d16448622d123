import pytest

from perl_files import FOO_BAR_PM, FOO_PM, FOO_POD, MAKEFILE_PL
from verbump.bump import BumpReport, bump, rewrite_makefile_pl
from verbump.rewriter import (
    REWRITTEN,
    SKIPPED_NO_MATCH,
    SKIPPED_NOT_FOUND,
    SKIPPED_POD_ONLY,
    SourceFile,
)
from verbump.version import InvalidVersionError


def _sources(*paths):
    return [SourceFile.from_path(str(p)) for p in paths]


def _snapshot(root):
    return {p: p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()}


def test_end_to_end(perl_dist):
    foo = perl_dist / "lib" / "Foo.pm"

    report = bump(_sources(foo), "0.013", root=str(perl_dist))

    assert report.version == "0.013"
    assert report.next_version == "0.014"
    assert report.files == [(str(foo), REWRITTEN)]
    assert foo.read_text() == FOO_PM.replace("our $VERSION = '0.013'; # TRIAL", "our $VERSION = '0.014';")


def test_every_file_gets_the_same_version(perl_dist):
    foo = perl_dist / "lib" / "Foo.pm"
    bar = perl_dist / "lib" / "Foo" / "Bar.pm"
    script = perl_dist / "bin" / "foo"

    report = bump(_sources(foo, bar, script), "0.013", root=str(perl_dist))

    assert report.rewritten() == [str(foo), str(bar), str(script)]
    for path in (foo, bar, script):
        assert "our $VERSION = '0.014';\n" in path.read_text()


def test_invalid_version_aborts_before_touching_anything(perl_dist, captured_events):
    before = _snapshot(perl_dist)
    files = _sources(perl_dist / "lib" / "Foo.pm", perl_dist / "bin" / "foo")

    with pytest.raises(InvalidVersionError, match="1.2.3 is not an allowed version string"):
        bump(files, "1.2.3", root=str(perl_dist))

    assert _snapshot(perl_dist) == before
    assert captured_events == []


def test_underscore_version_needs_loose_mode(perl_dist):
    foo = perl_dist / "lib" / "Foo.pm"
    foo.write_text("package Foo;\nour $VERSION = '1.002_003';\n1;\n")

    with pytest.raises(InvalidVersionError):
        bump(_sources(foo), "1.002_003", root=str(perl_dist))

    report = bump(_sources(foo), "1.002_003", allow_decimal_underscore=True, root=str(perl_dist))

    assert report.next_version == "1.002_004"
    assert foo.read_text() == "package Foo;\nour $VERSION = '1.002_004';\n$VERSION = eval $VERSION;\n1;\n"


def test_skips_are_reported_and_the_run_continues(perl_dist):
    pod = perl_dist / "lib" / "Foo.pod"
    missing = perl_dist / "lib" / "Gone.pm"
    plain = perl_dist / "lib" / "Plain.pm"
    plain.write_text("package Plain;\n1;\n")
    bar = perl_dist / "lib" / "Foo" / "Bar.pm"

    report = bump(_sources(pod, missing, plain, bar), "0.013", root=str(perl_dist))

    assert report.files == [
        (str(pod), SKIPPED_POD_ONLY),
        (str(missing), SKIPPED_NOT_FOUND),
        (str(plain), SKIPPED_NO_MATCH),
        (str(bar), REWRITTEN),
    ]
    assert report.skipped() == report.files[:3]
    assert pod.read_text() == FOO_POD


def test_global_flag_is_passed_on(perl_dist):
    bar = perl_dist / "lib" / "Foo" / "Bar.pm"
    bar.write_text(FOO_BAR_PM + "package Foo::Baz;\nour $VERSION = '0.013';\n")

    bump(_sources(bar), "0.013", global_=True, root=str(perl_dist))

    assert bar.read_text().count("our $VERSION = '0.014';") == 2


def test_makefile_pl_is_bumped(perl_dist):
    report = bump([], "0.013", root=str(perl_dist))

    assert report.makefile_pl is True
    assert (perl_dist / "Makefile.PL").read_text() == MAKEFILE_PL.replace(
        '"VERSION" => "0.013"', '"VERSION" => "0.014"'
    )


def test_makefile_pl_can_be_left_alone(perl_dist):
    report = bump([], "0.013", munge_makefile_pl=False, root=str(perl_dist))

    assert report.makefile_pl is None
    assert (perl_dist / "Makefile.PL").read_text() == MAKEFILE_PL


def test_missing_makefile_pl_is_fine(tmp_path):
    report = bump([], "0.013", root=str(tmp_path))

    assert report.makefile_pl is None
    assert not (tmp_path / "Makefile.PL").exists()


def test_makefile_pl_without_version_is_a_silent_noop(tmp_path, captured_events):
    makefile = tmp_path / "Makefile.PL"
    makefile.write_text('WriteMakefile("NAME" => "Foo");\n')

    report = bump([], "0.013", root=str(tmp_path))

    assert report.makefile_pl is False
    assert makefile.read_text() == 'WriteMakefile("NAME" => "Foo");\n'
    assert "metadata.unchanged" in [e["event"] for e in captured_events]


def test_rewrite_makefile_pl_only_replaces_first_occurrence(tmp_path):
    makefile = tmp_path / "Makefile.PL"
    makefile.write_text('"VERSION" => "0.013",\n"VERSION" => "0.013",\n')

    assert rewrite_makefile_pl(str(makefile), "0.014")
    assert makefile.read_text() == '"VERSION" => "0.014",\n"VERSION" => "0.013",\n'


def test_io_failure_propagates_without_rollback(perl_dist):
    foo = perl_dist / "lib" / "Foo.pm"
    bar = perl_dist / "lib" / "Foo" / "Bar.pm"
    # readable original, but nowhere to write the result
    broken = SourceFile(str(perl_dist / "nowhere" / "Bar.pm"), str(bar))

    with pytest.raises(OSError):
        bump([SourceFile.from_path(str(foo)), broken], "0.013", root=str(perl_dist))

    assert "our $VERSION = '0.014';" in foo.read_text()
    assert (perl_dist / "Makefile.PL").read_text() == MAKEFILE_PL


def test_run_events(perl_dist, captured_events):
    foo = perl_dist / "lib" / "Foo.pm"

    report = bump(_sources(foo), "0.013", root=str(perl_dist))

    assert [e["event"] for e in captured_events] == [
        "run.started",
        "file.rewritten",
        "metadata.rewritten",
        "run.finished",
    ]
    assert captured_events[0]["next_version"] == "0.014"
    assert captured_events[0]["names"] == [str(foo)]
    assert captured_events[-1]["report"] is report
    assert isinstance(report, BumpReport)
