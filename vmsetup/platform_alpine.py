"""Alpine Linux platform implementations for Provisioner.

Each function takes `prov` (a Provisioner instance) as its first argument
and uses prov.log, prov._run, prov.distro, etc.
"""

from vmsetup import openrc
from vmsetup.config import (
    ALPINE_MIRROR,
    APK_REPOSITORIES,
    DOCKER_ALPINE_PACKAGES,
    SYSINFO_PACKAGE,
)


def install_docker(prov):
    """Install Docker from Alpine's community repository."""
    prov.log.info("Installing Docker for Alpine Linux...")

    enable_repo(prov, "community")
    prov._run(["apk", "update"])
    prov._run(["apk", "add"] + DOCKER_ALPINE_PACKAGES)
    prov.log.success("Docker installed (Alpine).")


def enable_docker_service(prov):
    return openrc.enable_service(prov, "docker")


def add_user_to_group(prov, user, group):
    return prov.best_effort(["addgroup", user, group])


def install_neofetch(prov):
    if prov.best_effort(["apk", "add", SYSINFO_PACKAGE]):
        return None
    return (
        f"{SYSINFO_PACKAGE} install failed. Ensure the community repository "
        f"is enabled in {APK_REPOSITORIES}."
    )


def _branch(version_id):
    """'3.20.3' -> 'v3.20'; unknown versions track latest-stable."""
    parts = version_id.split(".")
    if len(parts) >= 2 and parts[0].isdigit() and parts[1].isdigit():
        return f"v{parts[0]}.{parts[1]}"
    return "latest-stable"


def enable_repo(prov, repo_name):
    """Enable a named repository in /etc/apk/repositories.

    An active line ending in /<repo_name> is left alone; a commented one is
    uncommented; otherwise a mirror line for the running release is appended.
    Returns True if the file was changed.
    """
    repo_file = APK_REPOSITORIES
    suffix = f"/{repo_name}"
    try:
        with open(repo_file) as f:
            lines = f.readlines()
    except FileNotFoundError:
        lines = []

    for line in lines:
        stripped = line.strip()
        if stripped and not stripped.startswith("#") and stripped.rstrip("/").endswith(suffix):
            prov.log.info(f"Repository {repo_name} already enabled in {repo_file}")
            return False

    new_lines = []
    changed = False
    for line in lines:
        candidate = line.lstrip().lstrip("#").strip()
        if not changed and line.lstrip().startswith("#") and candidate.rstrip("/").endswith(suffix):
            new_lines.append(candidate + "\n")
            changed = True
        else:
            new_lines.append(line)

    if changed:
        prov.log.info(f"Uncommented {repo_name} in {repo_file}")
    else:
        if new_lines and not new_lines[-1].endswith("\n"):
            new_lines[-1] += "\n"
        entry = f"{ALPINE_MIRROR}/{_branch(prov.distro.version_id)}/{repo_name}"
        new_lines.append(entry + "\n")
        prov.log.info(f"Added {entry} to {repo_file}")

    with open(repo_file, "w") as f:
        f.writelines(new_lines)
    return True
