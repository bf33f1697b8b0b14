"""OS detection for the provisioning pipeline.

Reads /etc/os-release and maps the host onto one of four families, each bound
to a package manager. The result is computed once and every later
per-family step dispatches on it.
"""

import enum
import shutil
from dataclasses import dataclass

from vmsetup.config import OS_RELEASE_PATH
from vmsetup.errors import OSReleaseNotFoundError, UnsupportedDistributionError


class Family(str, enum.Enum):
    DEBIAN = "debian"
    RHEL = "rhel"
    FEDORA = "fedora"
    ALPINE = "alpine"


class PackageManager(str, enum.Enum):
    APT = "apt"
    DNF = "dnf"
    YUM = "yum"
    APK = "apk"


SUPPORTED = "Ubuntu/Debian, RHEL/CentOS/Alma/Rocky, Fedora, Alpine"

_ID_TABLE = {
    "ubuntu": Family.DEBIAN,
    "debian": Family.DEBIAN,
    "linuxmint": Family.DEBIAN,
    "pop": Family.DEBIAN,
    "rhel": Family.RHEL,
    "centos": Family.RHEL,
    "almalinux": Family.RHEL,
    "rocky": Family.RHEL,
    "red hat enterprise linux": Family.RHEL,
    "fedora": Family.FEDORA,
    "alpine": Family.ALPINE,
}

# Checked in order against ID_LIKE; first keyword hit wins.
_LIKE_KEYWORDS = [
    (("debian", "ubuntu"), Family.DEBIAN),
    (("rhel", "centos"), Family.RHEL),
    (("fedora",), Family.FEDORA),
    (("alpine",), Family.ALPINE),
]


@dataclass(frozen=True)
class DistroProfile:
    id: str
    family: Family
    package_manager: PackageManager
    id_like: str = ""
    version_id: str = ""
    version_codename: str = ""
    ubuntu_codename: str = ""


def parse_os_release(content: str) -> dict:
    """Parse os-release KEY=VALUE text into a dict with lowercase keys."""
    data = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, val = line.split("=", 1)
        val = val.strip()
        if len(val) >= 2 and val[0] == val[-1] and val[0] in ("'", '"'):
            val = val[1:-1]
        data[key.strip().lower()] = val
    return data


def _rhel_package_manager(which) -> PackageManager:
    return PackageManager.DNF if which("dnf") else PackageManager.YUM


def _package_manager(family: Family, which) -> PackageManager:
    if family == Family.DEBIAN:
        return PackageManager.APT
    if family == Family.RHEL:
        return _rhel_package_manager(which)
    if family == Family.FEDORA:
        return PackageManager.DNF
    return PackageManager.APK


def classify(os_release: dict, which=shutil.which) -> DistroProfile:
    """Map parsed os-release data to a DistroProfile.

    Exact ID match first, then keyword search in ID_LIKE.

    Raises:
        UnsupportedDistributionError: neither ID nor ID_LIKE is recognised.
    """
    distro_id = os_release.get("id", "").lower() or "unknown"
    id_like = os_release.get("id_like", "").lower()

    family = _ID_TABLE.get(distro_id)
    if family is None:
        for keywords, candidate in _LIKE_KEYWORDS:
            if any(k in id_like for k in keywords):
                family = candidate
                break
    if family is None:
        raise UnsupportedDistributionError(
            f"Unsupported distribution: {distro_id}. Supported: {SUPPORTED}."
        )

    return DistroProfile(
        id=distro_id,
        family=family,
        package_manager=_package_manager(family, which),
        id_like=id_like,
        version_id=os_release.get("version_id", ""),
        version_codename=os_release.get("version_codename", ""),
        ubuntu_codename=os_release.get("ubuntu_codename", ""),
    )


def detect_distro(path: str = OS_RELEASE_PATH, which=shutil.which) -> DistroProfile:
    """Read os-release at `path` and classify the host."""
    try:
        with open(path) as f:
            content = f.read()
    except FileNotFoundError:
        raise OSReleaseNotFoundError(
            f"{path} not found. Cannot detect distribution."
        ) from None
    return classify(parse_os_release(content), which=which)
