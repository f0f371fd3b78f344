"""Tests for the pacman executor."""

from unittest.mock import MagicMock, patch

import pytest

from rolesync._privilege import escalation_prefix
from rolesync.errors import ExecutorError
from rolesync.executor import Mode, PacmanExecutor


def _completed(returncode: int = 0) -> MagicMock:
    result = MagicMock()
    result.returncode = returncode
    return result


@pytest.fixture()
def as_root():
    with patch("rolesync._privilege.is_root", return_value=True):
        yield


@pytest.mark.usefixtures("as_root")
class TestApply:
    def test_empty_set_spawns_nothing(self):
        with patch("rolesync.executor.subprocess.run") as mock_run:
            PacmanExecutor().apply(Mode.INSTALL, [])
            PacmanExecutor().apply(Mode.UNINSTALL, set())
        mock_run.assert_not_called()

    def test_bulk_install(self):
        with patch("rolesync.executor.subprocess.run", return_value=_completed()) as mock_run:
            PacmanExecutor().apply(Mode.INSTALL, {"wireshark", "nmap"})
        cmds = [c[0][0] for c in mock_run.call_args_list]
        assert cmds[0] == ["pacman", "-Syu", "--noconfirm", "--needed", "nmap", "wireshark"]

    def test_install_marks_packages_explicit(self):
        with patch("rolesync.executor.subprocess.run", return_value=_completed()) as mock_run:
            PacmanExecutor().apply(Mode.INSTALL, {"python", "nmap"})
        cmds = [c[0][0] for c in mock_run.call_args_list]
        assert cmds[-1] == ["pacman", "-D", "--asexplicit", "nmap", "python"]
        assert len(cmds) == 2

    def test_mark_explicit_failure_raises(self):
        results = [_completed(0), _completed(1)]
        with patch("rolesync.executor.subprocess.run", side_effect=results):
            with pytest.raises(ExecutorError, match="explicitly installed") as exc_info:
                PacmanExecutor().apply(Mode.INSTALL, {"nmap"})
        assert exc_info.value.failed == ["nmap"]

    def test_uninstall_does_not_mark_explicit(self):
        with patch("rolesync.executor.subprocess.run", return_value=_completed()) as mock_run:
            PacmanExecutor().apply(Mode.UNINSTALL, {"john"})
        cmds = [c[0][0] for c in mock_run.call_args_list]
        assert cmds == [["pacman", "-Q", "john"], ["pacman", "-Rns", "--noconfirm", "john"]]

    def test_bulk_failure_falls_back_to_individual(self):
        results = [_completed(1), _completed(0), _completed(0), _completed(0)]
        with patch("rolesync.executor.subprocess.run", side_effect=results) as mock_run:
            PacmanExecutor().apply(Mode.INSTALL, {"a", "b"})
        cmds = [c[0][0] for c in mock_run.call_args_list]
        assert cmds[1] == ["pacman", "-S", "--noconfirm", "--needed", "a"]
        assert cmds[2] == ["pacman", "-S", "--noconfirm", "--needed", "b"]
        assert cmds[3] == ["pacman", "-D", "--asexplicit", "a", "b"]

    def test_individual_failure_raises_with_failed_packages(self):
        results = [_completed(1), _completed(0), _completed(1)]
        with patch("rolesync.executor.subprocess.run", side_effect=results):
            with pytest.raises(ExecutorError, match="b") as exc_info:
                PacmanExecutor().apply(Mode.INSTALL, {"a", "b"})
        assert exc_info.value.failed == ["b"]
        assert exc_info.value.mode == "install"

    def test_uninstall_skips_missing_packages(self):
        def fake_run(cmd, **kwargs):
            if cmd[1] == "-Q":
                return _completed(0 if cmd[2] == "john" else 1)
            return _completed(0)

        with patch("rolesync.executor.subprocess.run", side_effect=fake_run) as mock_run:
            PacmanExecutor().apply(Mode.UNINSTALL, {"john", "gone"})
        assert mock_run.call_args_list[-1][0][0] == ["pacman", "-Rns", "--noconfirm", "john"]

    def test_uninstall_all_missing_is_noop(self):
        with patch("rolesync.executor.subprocess.run", return_value=_completed(1)) as mock_run:
            PacmanExecutor().apply(Mode.UNINSTALL, {"gone"})
        assert [c[0][0][1] for c in mock_run.call_args_list] == ["-Q"]

    def test_missing_binary_raises(self):
        with patch("rolesync.executor.subprocess.run", side_effect=FileNotFoundError("pacman")):
            with pytest.raises(ExecutorError, match="Cannot run"):
                PacmanExecutor().apply(Mode.INSTALL, {"nmap"})

    def test_custom_binary(self):
        with patch("rolesync.executor.subprocess.run", return_value=_completed()) as mock_run:
            PacmanExecutor("/usr/bin/pacman").apply(Mode.INSTALL, {"nmap"})
        assert mock_run.call_args[0][0][0] == "/usr/bin/pacman"


class TestPrivilege:
    def test_root_needs_no_prefix(self):
        with patch("rolesync._privilege.is_root", return_value=True):
            assert escalation_prefix("sudo") == []

    def test_disabled_escalation(self):
        with patch("rolesync._privilege.is_root", return_value=False):
            assert escalation_prefix("none") == []

    def test_sudo_prefix(self):
        with (
            patch("rolesync._privilege.is_root", return_value=False),
            patch("rolesync._privilege.shutil.which", return_value="/usr/bin/sudo"),
        ):
            assert escalation_prefix("sudo") == ["/usr/bin/sudo"]

    def test_sudo_missing(self):
        with (
            patch("rolesync._privilege.is_root", return_value=False),
            patch("rolesync._privilege.shutil.which", return_value=None),
        ):
            with pytest.raises(ExecutorError, match="sudo"):
                escalation_prefix("sudo")

    def test_executor_prefixes_sudo(self):
        with (
            patch("rolesync._privilege.is_root", return_value=False),
            patch("rolesync._privilege.shutil.which", return_value="/usr/bin/sudo"),
            patch("rolesync.executor.subprocess.run", return_value=_completed()) as mock_run,
        ):
            PacmanExecutor().apply(Mode.INSTALL, {"nmap"})
        assert mock_run.call_args[0][0][:2] == ["/usr/bin/sudo", "pacman"]

    def test_denied_escalation_is_executor_error(self):
        results = [_completed(1), _completed(1)]
        with (
            patch("rolesync._privilege.is_root", return_value=False),
            patch("rolesync._privilege.shutil.which", return_value="/usr/bin/sudo"),
            patch("rolesync.executor.subprocess.run", side_effect=results),
        ):
            with pytest.raises(ExecutorError):
                PacmanExecutor().apply(Mode.INSTALL, {"nmap"})
