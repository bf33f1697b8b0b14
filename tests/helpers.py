"""Shared fakes for the test suite."""

import io
import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

from rich.console import Console

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from vmsetup.base import Provisioner
from vmsetup.context import InvocationContext
from vmsetup.logging import ProvisionLogger
from vmsetup.osdetect import DistroProfile, Family, PackageManager


def mock_popen_factory(returncode=0, fail=(), outputs=None):
    """Create a mock subprocess.Popen that simulates line-by-line streaming.

    Commands starting with any prefix in `fail` exit 1; `outputs` maps a
    command prefix tuple to the lines it prints.
    """
    outputs = outputs or {}

    def matches(cmd, prefix):
        return list(cmd[:len(prefix)]) == list(prefix)

    def make_popen(cmd, *args, **kwargs):
        mock_proc = MagicMock()
        lines = []
        for prefix, out in outputs.items():
            if matches(cmd, prefix):
                lines = list(out)
        mock_proc.stdout = iter(lines)
        mock_proc.returncode = 1 if any(matches(cmd, f) for f in fail) else returncode
        mock_proc.wait.return_value = None
        return mock_proc
    return make_popen


def make_log():
    out, err = io.StringIO(), io.StringIO()
    log = ProvisionLogger(
        console=Console(file=out, width=200, highlight=False),
        err_console=Console(file=err, width=200, highlight=False),
    )
    return log, out, err


def make_prov(home, family=Family.DEBIAN, pm=PackageManager.APT, is_root=False,
              distro_id="debian", **distro_kw):
    if is_root:
        ctx = InvocationContext("root", Path(home), True)
    else:
        ctx = InvocationContext("alice", Path(home), False, uid=1000, gid=1000)
    distro = DistroProfile(id=distro_id, family=family, package_manager=pm, **distro_kw)
    log, out, err = make_log()
    return Provisioner(ctx, distro, log), out, err


def commands(mock_popen):
    return [c[0][0] for c in mock_popen.call_args_list]


