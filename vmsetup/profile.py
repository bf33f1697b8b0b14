"""Idempotent ~/.bashrc patch.

Appends a marker-delimited block that runs neofetch and prints the public IP
at login. The opening marker doubles as the "already patched" sentinel, so
the block is added at most once no matter how often setup runs.
"""

import os

from vmsetup.config import (
    IP_ECHO_URL,
    PROFILE_END_MARKER,
    PROFILE_MARKER,
    PROFILE_NAME,
    SYSINFO_PACKAGE,
)

PROFILE_BLOCK = (
    "\n"
    f"{PROFILE_MARKER}\n"
    f"{SYSINFO_PACKAGE}\n"
    f'echo "Public IP: $(curl -s {IP_ECHO_URL})"\n'
    f"{PROFILE_END_MARKER}\n"
)


def is_patched(path: str) -> bool:
    """True if `path` exists and already contains the marker."""
    try:
        with open(path, errors="replace") as f:
            return PROFILE_MARKER in f.read()
    except FileNotFoundError:
        return False


def patch_shell_profile(prov, path: str = None) -> bool:
    """Append the login block to the user's profile unless already present.

    Returns True if the file was changed, False if it was already patched.
    """
    path = path or os.path.join(str(prov.ctx.home_dir), PROFILE_NAME)
    if is_patched(path):
        prov.log.info(f"{PROFILE_NAME} already patched. Skipping.")
        return False

    prov.log.info(f"Appending {SYSINFO_PACKAGE} and public IP to ~/{PROFILE_NAME}...")
    created = not os.path.exists(path)
    with open(path, "a") as f:
        f.write(PROFILE_BLOCK)
    if created:
        prov.chown_to_user(path)

    prov.log.success(f"{PROFILE_NAME} updated.")
    return True
