"""RHEL-family (RHEL, CentOS, Alma, Rocky) platform implementations.

Uses dnf when present, yum otherwise (prov.pm).
"""

from vmsetup import systemd
from vmsetup.config import DOCKER_PACKAGES, RHEL_DOCKER_REPO, SYSINFO_PACKAGE


def install_docker(prov):
    """Install Docker CE from Docker's CentOS repository."""
    pm = prov.pm
    prov.log.info("Installing Docker CE for RHEL-family...")

    enable_epel(prov)
    prov._run([pm, "install", "-y", "yum-utils"])
    prov.best_effort(["yum-config-manager", "--add-repo", RHEL_DOCKER_REPO])

    prov._run([pm, "install", "-y"] + DOCKER_PACKAGES)
    prov.log.success("Docker CE installed (RHEL-family).")


def enable_epel(prov):
    """Install epel-release. Already-installed or unavailable is fine."""
    return prov.best_effort([prov.pm, "install", "-y", "epel-release"])


def enable_docker_service(prov):
    return systemd.enable_service(prov, "docker")


def add_user_to_group(prov, user, group):
    return prov.best_effort(["usermod", "-aG", group, user])


def install_neofetch(prov):
    """neofetch lives in EPEL on RHEL; returns None on success, else a hint."""
    enable_epel(prov)
    if prov.best_effort([prov.pm, "install", "-y", SYSINFO_PACKAGE]):
        return None
    return f"{SYSINFO_PACKAGE} install failed. On RHEL, ensure EPEL is accessible."
