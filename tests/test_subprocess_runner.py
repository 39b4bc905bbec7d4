import sys

import pytest

from mdata_client import LaunchError, SubprocessCommandRunner
from mdata_client.runner import CommandRunner


def _python(code: str) -> tuple[str, list[str]]:
    return sys.executable, ["-c", code]


def test_runner_satisfies_protocol() -> None:
    assert isinstance(SubprocessCommandRunner(), CommandRunner)


def test_invoke_collects_stdout_and_forwards_lines() -> None:
    out: list[str] = []
    err: list[str] = []
    binary, args = _python("import sys; print('one'); print('two'); print('oops', file=sys.stderr)")

    result = SubprocessCommandRunner().invoke(binary, args, out.append, err.append)

    assert result.exit_code == 0
    assert result.ok
    assert result.stdout == ("one", "two")
    assert out == ["one", "two"]
    assert err == ["oops"]


def test_invoke_reports_nonzero_exit_without_raising() -> None:
    binary, args = _python("import sys; sys.exit(3)")
    result = SubprocessCommandRunner().invoke(binary, args, lambda line: None, lambda line: None)
    assert result.exit_code == 3
    assert result.stdout == ()
    assert result.first_line is None


def test_invoke_passes_arguments_verbatim() -> None:
    binary, args = _python("import sys; print(sys.argv[1]); print(sys.argv[2])")
    result = SubprocessCommandRunner().invoke(binary, [*args, "key with space", "val'ue"], print, print)
    assert result.stdout == ("key with space", "val'ue")


def test_invoke_drains_large_stderr_output() -> None:
    binary, args = _python(
        "import sys\n"
        "for i in range(20000):\n"
        "    sys.stderr.write('e%d\\n' % i)\n"
        "print('done')\n"
    )
    err: list[str] = []
    result = SubprocessCommandRunner().invoke(binary, args, lambda line: None, err.append)
    assert result.stdout == ("done",)
    assert len(err) == 20000


def test_missing_binary_raises_launch_error(tmp_path) -> None:
    missing = str(tmp_path / "mdata-nowhere")
    with pytest.raises(LaunchError) as excinfo:
        SubprocessCommandRunner().invoke(missing, [], print, print)
    assert excinfo.value.binary == missing
    assert isinstance(excinfo.value.__cause__, OSError)


def test_null_byte_argument_raises_launch_error() -> None:
    binary, args = _python("print('unreachable')")
    with pytest.raises(LaunchError) as excinfo:
        SubprocessCommandRunner().invoke(binary, [*args, "va\x00lue"], print, print)
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_stdout_sink_errors_propagate() -> None:
    binary, args = _python("print('line')")

    def failing_sink(line: str) -> None:
        raise RuntimeError("sink down")

    with pytest.raises(RuntimeError, match="sink down"):
        SubprocessCommandRunner().invoke(binary, args, failing_sink, lambda line: None)
