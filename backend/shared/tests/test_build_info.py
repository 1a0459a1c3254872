"""Tests for shared.build_info module."""

import importlib
import subprocess
from importlib.metadata import PackageNotFoundError
from unittest.mock import patch

import shared.build_info as build_info_module


class TestGitShortSha:
    def test_returns_git_output(self):
        with patch("subprocess.check_output", return_value="abc1234\n"):
            assert build_info_module._git_short_sha() == "abc1234"

    def test_returns_unknown_when_git_not_found(self):
        with patch("subprocess.check_output", side_effect=FileNotFoundError):
            assert build_info_module._git_short_sha() == "unknown"

    def test_returns_unknown_when_git_fails(self):
        with patch(
            "subprocess.check_output",
            side_effect=subprocess.CalledProcessError(128, "git"),
        ):
            assert build_info_module._git_short_sha() == "unknown"


class TestInstalledVersion:
    def test_falls_back_to_dev(self):
        with patch.object(build_info_module, "version", side_effect=PackageNotFoundError):
            assert build_info_module._installed_version() == "dev"


class TestModuleLevelConstants:
    def test_app_version_reads_from_env(self):
        with patch.dict("os.environ", {"APP_VERSION": "1.2.3"}):
            importlib.reload(build_info_module)
            assert build_info_module.APP_VERSION == "1.2.3"
        importlib.reload(build_info_module)

    def test_git_commit_reads_from_env(self):
        with patch.dict("os.environ", {"GIT_COMMIT": "abc1234"}):
            importlib.reload(build_info_module)
            assert build_info_module.GIT_COMMIT == "abc1234"
        importlib.reload(build_info_module)
