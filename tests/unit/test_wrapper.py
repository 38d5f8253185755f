"""Tests for the indexer wrapper script."""

from __future__ import annotations

import os
import stat
import subprocess
import sys
from pathlib import Path

import pytest

from zoektd.daemon.args import synthesize_indexer_args
from zoektd.daemon.wrapper import (
    SCRIPT_MODE,
    build_indexer_script,
    indexer_search_path,
    write_indexer_script,
)
from zoektd.errors import BootstrapError


def render(config) -> str:
    return build_indexer_script(config, synthesize_indexer_args(config.daemon))


class TestSearchPath:
    """Tests for the PATH prepended to the indexer environment."""

    def test_order_with_ctags(self, make_config) -> None:
        """Test ctags, zoekt, then git."""
        config = make_config()

        assert indexer_search_path(config) == ["/opt/ctags/bin", "/opt/zoekt/bin", "/opt/git/bin"]

    def test_ctags_disabled(self, make_config) -> None:
        """Test the ctags directory is left out when ctags is disabled."""
        config = make_config(ctags={"enabled": False})

        assert indexer_search_path(config) == ["/opt/zoekt/bin", "/opt/git/bin"]


class TestBuildIndexerScript:
    """Tests for build_indexer_script."""

    def test_shebang_and_exec(self, make_config) -> None:
        """Test the script is a shell script that execs the indexer."""
        script = render(make_config())

        assert script.startswith("#!/bin/sh\n")
        assert "exec zoekt-git-index" in script

    def test_path_export(self, make_config) -> None:
        """Test PATH puts ctags first and keeps the inherited PATH last."""
        script = render(make_config())

        assert 'export PATH="/opt/ctags/bin:/opt/zoekt/bin:/opt/git/bin:$PATH"' in script

    def test_arguments_rendered(self, make_config) -> None:
        """Test synthesized arguments reach the exec line."""
        script = render(make_config(branches="main,dev", large_files=["*.min.js"]))

        assert "-require_ctags" in script
        assert "-branches \\\n  main,dev" in script
        assert "'*.min.js'" in script

    def test_repo_with_spaces_quoted(self, make_config) -> None:
        """Test each repository path is quoted individually."""
        script = render(make_config(repos=["/src/my repo", "/src/plain"]))

        assert "'/src/my repo'" in script
        assert script.rstrip().endswith("/src/plain")

    def test_darwin_truncates_logs(self, make_config, tmp_path: Path) -> None:
        """Test macOS resets the launchd log files before indexing."""
        script = render(make_config(platform="darwin"))
        log_dir = tmp_path / "home" / "Library" / "Logs"

        assert f"logDir={log_dir}" in script
        assert ': > "$logDir/zoekt-indexer.log"' in script
        assert ': > "$logDir/zoekt-indexer.err"' in script
        assert script.index("logDir=") < script.index("exec ")

    def test_linux_leaves_logs_alone(self, make_config) -> None:
        """Test Linux relies on journald and does not touch log files."""
        script = render(make_config(platform="linux"))

        assert "logDir" not in script
        assert ": >" not in script


class TestWriteIndexerScript:
    """Tests for write_indexer_script."""

    def test_writes_executable(self, tmp_path: Path) -> None:
        """Test the script is written with mode 0755."""
        path = tmp_path / "state" / "zoekt-indexer"

        write_indexer_script(path, "#!/bin/sh\nexit 0\n")

        assert path.read_text() == "#!/bin/sh\nexit 0\n"
        assert stat.S_IMODE(os.stat(path).st_mode) == SCRIPT_MODE

    def test_write_failure_names_file(self, tmp_path: Path) -> None:
        """Test a failed write reports the script path as a file write."""
        path = tmp_path / "zoekt-indexer"
        path.mkdir()

        with pytest.raises(BootstrapError) as exc_info:
            write_indexer_script(path, "#!/bin/sh\n")

        assert exc_info.value.message.startswith(f"Cannot write {path}:")
        assert exc_info.value.action == "write"


def fake_executable(path: Path, body: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"#!/bin/sh\n{body}\n")
    path.chmod(0o755)


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell required")
class TestRunIndexerScript:
    """Tests that execute the generated wrapper against a stand-in indexer."""

    @pytest.fixture
    def packages(self, tmp_path: Path) -> dict[str, Path]:
        return {name: tmp_path / "pkgs" / name for name in ("ctags", "zoekt", "git")}

    def run_wrapper(self, make_config, packages: dict[str, Path], tmp_path: Path, **daemon):
        record = tmp_path / "record.txt"
        fake_executable(
            packages["zoekt"] / "bin" / "zoekt-git-index",
            f"printf '%s\\n' \"$PATH\" \"$@\" > '{record}'\nexit 7",
        )
        ctags = {"package": str(packages["ctags"]), **daemon.pop("ctags", {})}
        config = make_config(
            platform="linux",
            package=str(packages["zoekt"]),
            ctags=ctags,
            **daemon,
        )
        config.git_package = packages["git"]
        indexer_args = synthesize_indexer_args(config.daemon)
        script = write_indexer_script(
            tmp_path / "state" / "zoekt-indexer",
            build_indexer_script(config, indexer_args),
        )

        proc = subprocess.run(
            [str(script)],
            env={"PATH": "/usr/bin:/bin"},
            capture_output=True,
            text=True,
        )
        return proc, record.read_text().splitlines(), indexer_args

    def test_exit_status_passes_through(self, make_config, packages, tmp_path: Path) -> None:
        """Test the indexer's exit status reaches the caller unchanged."""
        proc, _, _ = self.run_wrapper(make_config, packages, tmp_path)

        assert proc.returncode == 7

    def test_path_order(self, make_config, packages, tmp_path: Path) -> None:
        """Test ctags, zoekt and git bin directories lead PATH in that order."""
        _, lines, _ = self.run_wrapper(make_config, packages, tmp_path)

        assert lines[0].split(":") == [
            str(packages["ctags"] / "bin"),
            str(packages["zoekt"] / "bin"),
            str(packages["git"] / "bin"),
            "/usr/bin",
            "/bin",
        ]

    def test_ctags_disabled_path(self, make_config, packages, tmp_path: Path) -> None:
        """Test PATH starts at zoekt when ctags is disabled."""
        _, lines, _ = self.run_wrapper(
            make_config, packages, tmp_path, ctags={"enabled": False}
        )

        assert lines[0].split(":")[0] == str(packages["zoekt"] / "bin")

    def test_arguments_arrive_intact(self, make_config, packages, tmp_path: Path) -> None:
        """Test a repository path with a space arrives as one argument."""
        _, lines, indexer_args = self.run_wrapper(
            make_config, packages, tmp_path, repos=["/src/my repo", "/src/plain"]
        )

        assert lines[1:] == list(indexer_args)
        assert "/src/my repo" in lines
