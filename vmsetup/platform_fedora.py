"""Fedora platform implementations for Provisioner."""

from vmsetup import systemd
from vmsetup.config import DOCKER_PACKAGES, FEDORA_DOCKER_REPO, SYSINFO_PACKAGE


def install_docker(prov):
    """Install Docker CE from Docker's Fedora repository."""
    prov.log.info("Installing Docker CE for Fedora...")

    prov._run(["dnf", "install", "-y", "dnf-plugins-core"])
    prov.best_effort(["dnf", "config-manager", "--add-repo", FEDORA_DOCKER_REPO])

    prov._run(["dnf", "install", "-y"] + DOCKER_PACKAGES)
    prov.log.success("Docker CE installed (Fedora).")


def enable_docker_service(prov):
    return systemd.enable_service(prov, "docker")


def add_user_to_group(prov, user, group):
    return prov.best_effort(["usermod", "-aG", group, user])


def install_neofetch(prov):
    if prov.best_effort(["dnf", "install", "-y", SYSINFO_PACKAGE]):
        return None
    return f"{SYSINFO_PACKAGE} install failed. Try: dnf install -y {SYSINFO_PACKAGE}"
