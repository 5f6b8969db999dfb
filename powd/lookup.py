# -*- coding: utf-8 -
#
# This file is part of powd released under the MIT license.
# See the NOTICE for more information.

from collections import namedtuple

DEFAULT_ROOT = "default"

LookupResult = namedtuple("LookupResult", ["domain", "root"])


def candidates_for_host(host, domain):
    """\
    Return the application names ``host`` may refer to under ``domain``,
    most specific first.

    ``asset0.37s.basecamp.dev`` under ``dev`` yields
    ``["asset0.37s.basecamp", "37s.basecamp", "basecamp"]``. A host that
    does not end with ``"." + domain`` yields nothing.
    """
    host = host.lower()
    suffix = "." + domain.lower()
    if not host.endswith(suffix):
        return []

    labels = host[:-len(suffix)].split(".")
    return [".".join(labels[i:]) for i in range(len(labels))]


def find_application_root_for_host(host, domains, roots):
    """\
    Find the application serving ``host``.

    Domains are tried in configured order, and within a domain the most
    specific candidate name first. When nothing matches, the ``default``
    root is served under the first configured domain. Returns a
    ``LookupResult`` or None.
    """
    for domain in domains:
        for name in candidates_for_host(host, domain):
            if name in roots:
                return LookupResult(domain, roots[name])

    if DEFAULT_ROOT in roots and domains:
        return LookupResult(domains[0], roots[DEFAULT_ROOT])
    return None
