"""nginx reverse-proxy scaffold under <home>/nginx.

Layout:
    nginx/
      config/nginx.conf
      logs/
      docker-compose.yml

Both files are rewritten on every run so the scaffold always matches the
current network name; anything under logs/ is left alone.
"""

import json
import os
from dataclasses import dataclass

from vmsetup.config import COMPOSE_FILE_NAME, NGINX_CONF_NAME, NGINX_DIR_NAME
from vmsetup.templates import provision_file, render_file

COMPOSE_TEMPLATE = f"{COMPOSE_FILE_NAME}.tmpl"


@dataclass(frozen=True)
class ProxyScaffold:
    root: str
    config_dir: str
    logs_dir: str
    nginx_conf: str
    compose_file: str

    @classmethod
    def under(cls, home) -> "ProxyScaffold":
        root = os.path.join(str(home), NGINX_DIR_NAME)
        config_dir = os.path.join(root, "config")
        return cls(
            root=root,
            config_dir=config_dir,
            logs_dir=os.path.join(root, "logs"),
            nginx_conf=os.path.join(config_dir, NGINX_CONF_NAME),
            compose_file=os.path.join(root, COMPOSE_FILE_NAME),
        )


def render_compose(network: str) -> str:
    """docker-compose.yml text attaching nginx to the external `network`.

    The name is written as a double-quoted scalar so YAML never reads it as
    a number, null, comment or mapping.
    """
    return render_file(COMPOSE_TEMPLATE, network=json.dumps(network))


def write_scaffold(prov, network: str) -> ProxyScaffold:
    """Create the directory tree and (over)write nginx.conf and the compose file."""
    paths = ProxyScaffold.under(prov.ctx.home_dir)
    prov.log.info(f"Creating nginx directory structure at {paths.root}...")

    os.makedirs(paths.logs_dir, exist_ok=True)
    os.makedirs(paths.config_dir, exist_ok=True)

    prov.write_file(paths.nginx_conf, provision_file(NGINX_CONF_NAME))
    prov.write_file(paths.compose_file, render_compose(network))
    prov.chown_to_user(paths.root, recursive=True)

    prov.log.success(f"nginx structure created at {paths.root}")
    return paths
