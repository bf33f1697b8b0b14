"""Fixed values used across the provisioning steps."""

OS_RELEASE_PATH = "/etc/os-release"

# Docker CE
DOCKER_DOWNLOAD_URL = "https://download.docker.com/linux"
DOCKER_PACKAGES = [
    "docker-ce",
    "docker-ce-cli",
    "containerd.io",
    "docker-buildx-plugin",
    "docker-compose-plugin",
]
DOCKER_LEGACY_PACKAGES = ["docker", "docker-engine", "docker.io", "containerd", "runc"]
DOCKER_ALPINE_PACKAGES = ["docker", "docker-cli-compose"]
DOCKER_SERVICE = "docker"
DOCKER_GROUP = "docker"

APT_KEYRINGS_DIR = "/etc/apt/keyrings"
APT_DOCKER_KEYRING_NAME = "docker.gpg"
APT_DOCKER_LIST = "docker.list"
APT_SOURCES_DIR = "/etc/apt/sources.list.d"
APT_PREREQUISITES = ["ca-certificates", "curl", "gnupg", "lsb-release"]

RHEL_DOCKER_REPO = f"{DOCKER_DOWNLOAD_URL}/centos/docker-ce.repo"
FEDORA_DOCKER_REPO = f"{DOCKER_DOWNLOAD_URL}/fedora/docker-ce.repo"

APK_REPOSITORIES = "/etc/apk/repositories"
ALPINE_MIRROR = "https://dl-cdn.alpinelinux.org/alpine"

# System info tool
SYSINFO_PACKAGE = "neofetch"

# nginx scaffold
NGINX_DIR_NAME = "nginx"
NGINX_CONF_NAME = "nginx.conf"
COMPOSE_FILE_NAME = "docker-compose.yml"

# Shell profile
PROFILE_NAME = ".bashrc"
PROFILE_MARKER = "# --- setup-vm additions ---"
PROFILE_END_MARKER = "# --- end setup-vm additions ---"
IP_ECHO_URL = "ifconfig.me"

USAGE = "Run: setup-vm <network-name>"
