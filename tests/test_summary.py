"""Tests for the completion report."""

import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from vmsetup.base import ProvisionReport
from vmsetup.context import InvocationContext
from vmsetup.summary import print_summary, summary_lines

from helpers import make_log

USER = InvocationContext("alice", Path("/home/alice"), False, uid=1000, gid=1000)
ROOT = InvocationContext("root", Path("/root"), True)


def full_report(**overrides):
    report = ProvisionReport()
    report.docker_installed = True
    report.docker_running = True
    report.network_name = "tpet-dev"
    report.network_created = True
    report.group_added = True
    report.scaffold_dir = "/home/alice/nginx"
    report.sysinfo_installed = True
    report.profile_patched = True
    for key, value in overrides.items():
        setattr(report, key, value)
    return report


class TestSummaryLines:
    def test_everything_done(self):
        lines = summary_lines(full_report(), USER)
        assert ("ok", "Docker network 'tpet-dev' created") in lines
        assert ("ok", "User 'alice' added to the docker group") in lines
        assert all(level == "ok" for level, _ in lines)

    def test_rerun(self):
        lines = summary_lines(full_report(network_created=False, profile_patched=False), USER)
        assert ("info", "Docker network 'tpet-dev' already present") in lines
        assert ("info", "~/.bashrc already patched") in lines

    def test_service_not_running(self):
        lines = summary_lines(full_report(docker_running=False), USER)
        assert ("ok", "Docker CE installed and running") not in lines
        assert ("warn", "Docker CE installed but the service is not confirmed running") in lines

    def test_partial(self):
        lines = summary_lines(full_report(group_added=False, sysinfo_installed=False), USER)
        levels = [level for level, _ in lines]
        assert levels.count("warn") == 2

    def test_root(self):
        lines = summary_lines(full_report(group_added=None), ROOT)
        assert ("info", "Running as root; docker group unchanged") in lines


class TestPrintSummary:
    def test_next_steps(self):
        log, out, _ = make_log()
        print_summary(log, full_report(), USER)
        text = out.getvalue()
        assert "Setup Complete!" in text
        assert "newgrp docker" in text
        assert "cd /home/alice/nginx && docker compose up -d" in text
        assert "curl http://localhost" in text

    def test_root_has_no_group_step(self):
        log, out, _ = make_log()
        print_summary(log, full_report(group_added=None, scaffold_dir="/root/nginx"), ROOT)
        text = out.getvalue()
        assert "newgrp" not in text
        assert "1. Start nginx:" in text
