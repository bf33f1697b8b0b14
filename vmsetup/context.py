"""Resolve who the run is for.

Under sudo the process runs as root, but the files it writes (scaffold,
shell profile) belong to the operator who invoked sudo. The context records
that user once, before anything else runs.
"""

import os
import pwd
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


@dataclass(frozen=True)
class InvocationContext:
    actual_user: str
    home_dir: Path
    is_root: bool
    uid: Optional[int] = None
    gid: Optional[int] = None

    @property
    def owner(self) -> Optional[str]:
        """Numeric uid:gid for chown, or None when ownership should not change."""
        if self.is_root or self.uid is None or self.gid is None:
            return None
        return f"{self.uid}:{self.gid}"


def _logname() -> str:
    try:
        result = subprocess.run(["logname"], capture_output=True, text=True)
    except FileNotFoundError:
        return ""
    if result.returncode != 0:
        return ""
    return result.stdout.strip()


def resolve_invocation_context(environ: Mapping[str, str] = None,
                               log=None) -> InvocationContext:
    """Work out the real user and home directory.

    SUDO_USER wins over USER, which wins over logname(1). An empty result or
    "root" yields a root context that keeps the current HOME.
    """
    environ = os.environ if environ is None else environ
    home = Path(environ.get("HOME") or os.path.expanduser("~"))

    user = environ.get("SUDO_USER") or environ.get("USER") or _logname()
    if not user or user == "root":
        if log:
            log.info("Running as root.")
        return InvocationContext(actual_user="root", home_dir=home, is_root=True)

    uid = gid = None
    try:
        entry = pwd.getpwnam(user)
    except KeyError:
        entry = None
    if entry is not None:
        uid, gid = entry.pw_uid, entry.pw_gid
        if entry.pw_dir:
            home = Path(entry.pw_dir)

    if log:
        log.info(f"Actual user: {user}, HOME: {home}")
    return InvocationContext(
        actual_user=user, home_dir=home, is_root=False, uid=uid, gid=gid,
    )
