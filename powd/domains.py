# -*- coding: utf-8 -
#
# This file is part of powd released under the MIT license.
# See the NOTICE for more information.

import re


def compile_domain_pattern(domains):
    """\
    Build a case-insensitive regular expression matching any host that
    equals one of ``domains`` or ends with ``"." + domain``.

    Domains are escaped, so ``"co.uk"`` only matches a literal dot.
    """
    alternatives = "|".join(re.escape(d) for d in domains)
    return re.compile(r"(^|\.)(%s)\Z" % alternatives, re.IGNORECASE)


class DomainMatcher(object):

    def __init__(self, domains):
        self.domains = list(domains)
        if self.domains:
            self.pattern = compile_domain_pattern(self.domains)
        else:
            self.pattern = None

    def matches(self, host):
        if self.pattern is None or not host:
            return False
        return self.pattern.search(host) is not None

    __call__ = matches

    def __repr__(self):
        return "<DomainMatcher %s>" % ",".join(self.domains)
