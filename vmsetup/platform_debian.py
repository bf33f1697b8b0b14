"""Debian/Ubuntu platform implementations for Provisioner.

Each function takes `prov` (a Provisioner instance) as its first argument
and uses prov.log, prov._run, prov.distro, etc.
"""

import os
import subprocess

from vmsetup import systemd
from vmsetup.config import (
    APT_DOCKER_KEYRING_NAME,
    APT_DOCKER_LIST,
    APT_KEYRINGS_DIR,
    APT_PREREQUISITES,
    APT_SOURCES_DIR,
    DOCKER_DOWNLOAD_URL,
    DOCKER_LEGACY_PACKAGES,
    DOCKER_PACKAGES,
    SYSINFO_PACKAGE,
)
from vmsetup.errors import ProvisionError


def install_docker(prov):
    """Install Docker CE from download.docker.com's apt repository."""
    prov.log.info("Installing Docker CE for Debian/Ubuntu...")

    prov._run(["apt-get", "remove", "-y"] + DOCKER_LEGACY_PACKAGES, check=False, quiet=True)
    prov._run(["apt-get", "update", "-y"])
    prov._run(["apt-get", "install", "-y"] + APT_PREREQUISITES)

    os.makedirs(APT_KEYRINGS_DIR, exist_ok=True)
    os.chmod(APT_KEYRINGS_DIR, 0o755)

    repo_distro, codename = repo_target(prov)
    repo_url = f"{DOCKER_DOWNLOAD_URL}/{repo_distro}"
    keyring_path = os.path.join(APT_KEYRINGS_DIR, APT_DOCKER_KEYRING_NAME)
    try:
        add_apt_key(prov, f"{repo_url}/gpg", keyring_path)
    except ProvisionError as e:
        prov.log.warn(f"{e} (continuing)")
    if os.path.exists(keyring_path):
        os.chmod(keyring_path, 0o644)

    options = [f"signed-by={keyring_path}"]
    arch = _dpkg_architecture(prov)
    if arch:
        options.insert(0, f"arch={arch}")
    add_apt_repo(prov, f"deb [{' '.join(options)}] {repo_url} {codename} stable",
                 APT_DOCKER_LIST)

    prov._run(["apt-get", "update", "-y"])
    prov._run(["apt-get", "install", "-y"] + DOCKER_PACKAGES)
    prov.log.success("Docker CE installed (Debian/Ubuntu).")


def enable_docker_service(prov):
    return systemd.enable_service(prov, "docker")


def add_user_to_group(prov, user, group):
    return prov.best_effort(["usermod", "-aG", group, user])


def install_neofetch(prov):
    """Install neofetch via apt. Returns None on success, else a hint."""
    if prov.best_effort(["apt-get", "install", "-y", SYSINFO_PACKAGE]):
        return None
    return (
        f"{SYSINFO_PACKAGE} install failed. Newer Debian/Ubuntu releases dropped "
        f"it; install it manually or remove it from ~/.bashrc."
    )


def repo_target(prov):
    """Return (distro, codename) used in Docker's apt repository URL.

    Docker publishes repositories for debian and ubuntu only, so derivatives
    (Mint, Pop!_OS, ...) are pointed at their parent.
    """
    distro = prov.distro
    if distro.id in ("debian", "ubuntu"):
        repo_distro = distro.id
    elif "ubuntu" in distro.id_like:
        repo_distro = "ubuntu"
    else:
        repo_distro = "debian"

    if repo_distro == "ubuntu" and distro.ubuntu_codename:
        codename = distro.ubuntu_codename
    else:
        codename = distro.version_codename
    if not codename:
        codename = _lsb_codename(prov)
    if not codename:
        raise ProvisionError(
            "Cannot determine the distribution codename for the Docker apt repository."
        )
    return repo_distro, codename


def _lsb_codename(prov):
    result = prov._run(["lsb_release", "-cs"], check=False, quiet=True)
    return result.stdout.strip() if result.returncode == 0 else ""


def _dpkg_architecture(prov):
    result = prov._run(["dpkg", "--print-architecture"], check=False, quiet=True)
    return result.stdout.strip() if result.returncode == 0 else ""


def add_apt_key(prov, url, keyring_path):
    """Download an APT signing key and store it dearmored at keyring_path."""
    prov.log.info(f"Adding APT key from {url}")
    os.makedirs(os.path.dirname(keyring_path) or ".", exist_ok=True)
    try:
        dl = subprocess.run(["curl", "-fsSL", url], capture_output=True)
    except FileNotFoundError:
        raise ProvisionError("curl not found; cannot download APT key") from None
    if dl.returncode != 0:
        raise ProvisionError(
            f"Failed to download APT key from {url}: {dl.stderr.decode().strip()}"
        )
    if not dl.stdout:
        raise ProvisionError(f"APT key download returned empty response from {url}")

    try:
        result = subprocess.run(
            ["gpg", "--dearmor"],
            input=dl.stdout,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except FileNotFoundError:
        raise ProvisionError("gpg not found; cannot dearmor APT key") from None
    if result.returncode != 0:
        raise ProvisionError(f"gpg --dearmor failed: {result.stderr.decode().strip()}")
    with open(keyring_path, "wb") as f:
        f.write(result.stdout)


def add_apt_repo(prov, repo_line, filename):
    """Write an APT repository source file, replacing any previous one."""
    dest = os.path.join(APT_SOURCES_DIR, filename)
    prov.log.info(f"Adding APT repo: {filename}")
    os.makedirs(APT_SOURCES_DIR, exist_ok=True)
    with open(dest, "w") as f:
        f.write(repo_line + "\n")
