"""Config file templating for the files vmsetup writes.

Templates use $variable / ${variable} substitution (Python string.Template).
Unknown names are left untouched, so nginx or shell variables in a file
survive rendering. Template and static files ship inside the package under
provision/.
"""

import os
from string import Template

PROVISION_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "provision")


def provision_file(name: str) -> str:
    """Return the contents of a file shipped under vmsetup/provision/."""
    with open(os.path.join(PROVISION_DIR, name)) as f:
        return f.read()


def render(template_str: str, **kwargs) -> str:
    """Substitute $variable references in template_str."""
    return Template(template_str).safe_substitute(**kwargs)


def render_file(name: str, **kwargs) -> str:
    """Render the template `name` from the provision directory."""
    return render(provision_file(name), **kwargs)
