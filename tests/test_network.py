"""Tests for network name resolution and creation."""

import io
import os
import sys
from unittest.mock import patch, MagicMock

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from vmsetup.errors import NoInteractiveInputError
from vmsetup.network import PROMPT, ensure_network, resolve_network_name

from helpers import commands, make_log, make_prov, mock_popen_factory


class FakeTTY(io.StringIO):
    def isatty(self):
        return True


class TestResolveNetworkName:
    def test_argument_used_verbatim(self):
        log = MagicMock()
        assert resolve_network_name("tpet-dev", log, stdin=io.StringIO()) == "tpet-dev"
        assert not log.prompt.called

    def test_no_tty_no_argument(self):
        log = MagicMock()
        with pytest.raises(NoInteractiveInputError, match="setup-vm <network-name>"):
            resolve_network_name(None, log, stdin=io.StringIO())
        assert not log.prompt.called

    def test_empty_argument_means_prompt(self):
        log = MagicMock()
        log.prompt.return_value = "web"
        assert resolve_network_name("", log, stdin=FakeTTY()) == "web"

    def test_reprompts_on_empty(self):
        log = MagicMock()
        log.prompt.side_effect = ["", "   ", "  tpet-dev \n"]
        assert resolve_network_name(None, log, stdin=FakeTTY()) == "tpet-dev"
        assert log.prompt.call_count == 3
        log.prompt.assert_called_with(PROMPT)
        assert log.error.call_count == 2
        log.error.assert_called_with("Network name cannot be empty. Please try again.")

    def test_eof_while_prompting(self):
        log = MagicMock()
        log.prompt.side_effect = EOFError
        with pytest.raises(NoInteractiveInputError):
            resolve_network_name(None, log, stdin=FakeTTY())

    def test_closed_stdin(self):
        stdin = io.StringIO()
        stdin.close()
        with pytest.raises(NoInteractiveInputError):
            resolve_network_name(None, MagicMock(), stdin=stdin)

    def test_prompt_goes_through_console(self):
        log, out, _ = make_log()
        with patch.object(log.console, "input", return_value="lan") as console_input:
            assert resolve_network_name(None, log, stdin=FakeTTY()) == "lan"
        assert PROMPT in console_input.call_args[0][0]


class TestEnsureNetwork:
    @patch("vmsetup.base.subprocess.Popen")
    def test_created(self, mock_popen, tmp_path):
        mock_popen.side_effect = mock_popen_factory()
        prov, out, _ = make_prov(tmp_path)
        assert ensure_network(prov, "tpet-dev") is True
        assert commands(mock_popen) == [["docker", "network", "create", "tpet-dev"]]
        assert "Docker network 'tpet-dev' created." in out.getvalue()

    @patch("vmsetup.base.subprocess.Popen")
    def test_twice_both_succeed(self, mock_popen, tmp_path):
        results = iter([0, 1])

        def popen(cmd, *args, **kwargs):
            return mock_popen_factory(returncode=next(results))(cmd)

        mock_popen.side_effect = popen
        prov, out, err = make_prov(tmp_path)
        assert ensure_network(prov, "tpet-dev") is True
        assert ensure_network(prov, "tpet-dev") is False
        assert "may already exist. Continuing." in out.getvalue()
        assert err.getvalue() == ""
