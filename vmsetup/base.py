"""Provisioner: runs the VM setup pipeline.

The provisioner owns the invocation context, the detected distro profile and
the logger. Per-family work (Docker install, service control, group
membership, neofetch) is delegated to a platform module chosen once from the
profile's family. Every external command goes through _run(), which streams
the child's output into the log and raises CommandError on failure unless
the caller marks the command as best-effort.
"""

import os
import subprocess

from vmsetup import network, profile, scaffold
from vmsetup.config import DOCKER_GROUP, SYSINFO_PACKAGE
from vmsetup.context import InvocationContext
from vmsetup.errors import CommandError, ProvisionError
from vmsetup.logging import ProvisionLogger
from vmsetup.osdetect import DistroProfile, Family


class ProvisionReport:
    """Outcome of each step, for the closing summary."""

    def __init__(self):
        self.docker_installed = False
        self.docker_running = None
        self.network_name = ""
        self.network_created = None
        self.group_added = None
        self.scaffold_dir = None
        self.sysinfo_installed = None
        self.profile_patched = None


def platform_for(family: Family):
    """Return the platform module implementing `family`'s steps."""
    if family == Family.DEBIAN:
        from vmsetup import platform_debian as _plat
    elif family == Family.RHEL:
        from vmsetup import platform_rhel as _plat
    elif family == Family.FEDORA:
        from vmsetup import platform_fedora as _plat
    elif family == Family.ALPINE:
        from vmsetup import platform_alpine as _plat
    else:
        raise ProvisionError(f"No platform for family: {family}")
    return _plat


class Provisioner:
    """Runs the setup steps for one host, in order."""

    TOTAL_STEPS = 6

    def __init__(self, ctx: InvocationContext, distro: DistroProfile,
                 log: ProvisionLogger = None):
        self.ctx = ctx
        self.distro = distro
        self.log = log or ProvisionLogger()
        self.report = ProvisionReport()
        self._platform = platform_for(distro.family)

    @property
    def pm(self) -> str:
        """Package manager binary name."""
        return self.distro.package_manager.value

    # --- Pipeline ---

    def provision(self, network_arg: str = None, stdin=None) -> ProvisionReport:
        """Run every step from Docker install to shell-profile patch."""
        self.log.progress(1, self.TOTAL_STEPS, "Installing Docker")
        self.install_docker()

        self.log.progress(2, self.TOTAL_STEPS, "Configuring Docker service")
        self.setup_docker_service()

        self.log.progress(3, self.TOTAL_STEPS, "Creating Docker network")
        name = network.resolve_network_name(network_arg, self.log, stdin=stdin)
        self.report.network_name = name
        self.report.network_created = network.ensure_network(self, name)

        self.log.progress(4, self.TOTAL_STEPS, "Writing nginx scaffold")
        self.report.scaffold_dir = scaffold.write_scaffold(self, name).root

        self.log.progress(5, self.TOTAL_STEPS, f"Installing {SYSINFO_PACKAGE}")
        self.install_neofetch()

        self.log.progress(6, self.TOTAL_STEPS, "Patching shell profile")
        self.report.profile_patched = profile.patch_shell_profile(self)
        return self.report

    def install_docker(self) -> None:
        """Install Docker CE and the compose plugin. Fails the run if the
        final package install fails."""
        self._platform.install_docker(self)
        self.report.docker_installed = True

    def setup_docker_service(self) -> None:
        """Enable/start the daemon and add the user to the docker group."""
        self.log.info("Enabling and starting Docker service...")
        running = self._platform.enable_docker_service(self)
        self.report.docker_running = running
        if running:
            self.log.success("Docker service enabled and started.")
        else:
            self.log.warn(
                "Docker service could not be enabled or started; "
                "start it manually before using docker."
            )

        if self.ctx.is_root:
            self.log.info(
                "Running as root. Skipping docker group add "
                "(root has docker access by default)."
            )
            return

        user = self.ctx.actual_user
        ok = self._platform.add_user_to_group(self, user, DOCKER_GROUP)
        self.report.group_added = ok
        if ok:
            self.log.success(f"User '{user}' added to the {DOCKER_GROUP} group.")
        else:
            self.log.warn(f"Could not add '{user}' to the {DOCKER_GROUP} group.")
        self.log.info(
            f"NOTE: You must log out and back in (or run 'newgrp {DOCKER_GROUP}') "
            "for group membership to take effect."
        )

    def install_neofetch(self) -> None:
        """Install the system info tool. Never fails the run."""
        self.log.info(f"Installing {SYSINFO_PACKAGE}...")
        hint = self._platform.install_neofetch(self)
        if hint is None:
            self.report.sysinfo_installed = True
            self.log.success(f"{SYSINFO_PACKAGE} installed.")
        else:
            self.report.sysinfo_installed = False
            self.log.error(hint)

    # --- Helpers used by steps and platform modules ---

    def write_file(self, path: str, content: str) -> None:
        """Write `content` to `path`, replacing any existing file."""
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w") as f:
            f.write(content)

    def chown_to_user(self, path: str, recursive: bool = False) -> None:
        """Hand `path` to the invoking user. No-op for root runs."""
        owner = self.ctx.owner
        if owner is None:
            return
        cmd = ["chown"]
        if recursive:
            cmd.append("-R")
        cmd.extend([owner, path])
        self._run(cmd, check=False)

    def best_effort(self, cmd: list) -> bool:
        """Run a command whose failure must not stop the run."""
        return self._run(cmd, check=False).returncode == 0

    # --- Internal ---

    @staticmethod
    def _is_progress_line(line: str) -> bool:
        """Detect progress bar lines (apt, dnf, curl) that spam logs."""
        s = line.strip()
        if s.startswith("|") and ("%" in s or "█" in s or "■" in s):
            return True
        if "━" in s or "╸" in s:
            return True
        if ("MB/s" in s or "kB/s" in s) and ("/" in s):
            return True
        if s.endswith("%") and s[:-1].replace(".", "").isdigit():
            return True
        return False

    def _run(self, cmd: list, check: bool = True,
             quiet: bool = False) -> subprocess.CompletedProcess:
        """Run a subprocess, streaming output line-by-line.

        With check=True a non-zero exit raises CommandError; with check=False
        a warning is logged (unless quiet) and the result is returned.
        """
        run_env = os.environ.copy()
        run_env.setdefault("DEBIAN_FRONTEND", "noninteractive")
        try:
            proc = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                bufsize=1,
                env=run_env,
            )
        except FileNotFoundError:
            if check:
                raise CommandError(cmd, 127, f"{cmd[0]}: command not found") from None
            if not quiet:
                self.log.warn(f"Command not found (non-fatal): {cmd[0]}")
            return subprocess.CompletedProcess(cmd, 127, stdout="", stderr="")
        lines = []
        for line in proc.stdout:
            stripped = line.rstrip("\n")
            lines.append(stripped)
            if not quiet and stripped.strip() and not self._is_progress_line(stripped):
                self.log.detail(stripped.strip())
        proc.wait()
        stdout = "\n".join(lines)
        result = subprocess.CompletedProcess(cmd, proc.returncode, stdout=stdout, stderr="")
        if result.returncode != 0:
            if check:
                raise CommandError(cmd, result.returncode, stdout)
            if not quiet:
                self.log.warn(
                    f"Command exited {result.returncode} (non-fatal): {' '.join(cmd)}"
                )
        return result
