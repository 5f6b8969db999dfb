# -*- coding: utf-8 -
#
# This file is part of powd released under the MIT license.
# See the NOTICE for more information.

import json
import os
import subprocess
import sys

from powd.errors import ConfigLoadError

USER_CONFIG_PATH = os.path.join("~", ".powconfig")

# set by the shell or the dumping interpreter, never reported as user settings
IGNORED_VARIABLES = frozenset(
    ["PWD", "OLDPWD", "SHLVL", "_", "PYTHONCOERCECLOCALE"]
)

# sources the script, then prints the resulting environment as JSON
DUMP_ENV_SCRIPT = (
    '. "$1" >&2 && export PYTHONCOERCECLOCALE=0 && exec "$2" -c '
    '"import json, os, sys; json.dump(dict(os.environ), sys.stdout)"'
)


def load_user_env(path=USER_CONFIG_PATH, env=None, shell="/bin/sh"):
    """\
    Evaluate the user configuration script at ``path`` and return the
    variables it exports.

    Only variables that are new or changed relative to ``env``
    (``os.environ`` by default) are returned. A missing script yields an
    empty dict. The caller's environment is never modified.
    """
    path = os.path.abspath(os.path.expanduser(path))
    if not os.path.exists(path):
        return {}

    base = dict(os.environ if env is None else env)
    try:
        proc = subprocess.run(
            [shell, "-c", DUMP_ENV_SCRIPT, shell, path, sys.executable],
            env=base,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError as e:
        raise ConfigLoadError(path, output=str(e)) from e

    if proc.returncode != 0:
        raise ConfigLoadError(path, status=proc.returncode,
                              output=proc.stderr.decode("utf-8", "replace"))

    try:
        loaded = json.loads(proc.stdout.decode("utf-8"))
    except ValueError as e:
        raise ConfigLoadError(path, output=str(e)) from e

    return dict((k, v) for k, v in loaded.items()
                if k not in IGNORED_VARIABLES and base.get(k) != v)
