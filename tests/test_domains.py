# -*- coding: utf-8 -
#
# This file is part of powd released under the MIT license.
# See the NOTICE for more information.

import pytest

from powd.domains import DomainMatcher, compile_domain_pattern


@pytest.mark.parametrize('host, expected', [
    ('dev', True),
    ('myapp.dev', True),
    ('www.myapp.dev', True),
    ('WWW.MyApp.DEV', True),
    ('myapp.test', True),
    ('myapp.development', False),
    ('myappdev', False),
    ('dev.example.com', False),
    ('', False),
])
def test_matches(host, expected):
    matcher = DomainMatcher(["dev", "test"])
    assert matcher.matches(host) is expected
    assert matcher(host) is expected


def test_empty_domain_list_matches_nothing():
    matcher = DomainMatcher([])
    assert not matcher.matches("myapp.dev")
    assert not matcher.matches("")


def test_domains_are_escaped():
    matcher = DomainMatcher(["co.uk"])
    assert matcher.matches("myapp.co.uk")
    assert not matcher.matches("myapp.coXuk")


def test_metacharacters_are_literal():
    matcher = DomainMatcher(["d+v"])
    assert matcher.matches("myapp.d+v")
    assert not matcher.matches("myapp.ddv")


def test_compile_domain_pattern():
    pattern = compile_domain_pattern(["dev", "local"])
    assert pattern.search("a.b.local")
    assert pattern.search("A.LOCAL")
    assert not pattern.search("a.localhost")


def test_matcher_keeps_order():
    matcher = DomainMatcher(("test", "dev"))
    assert matcher.domains == ["test", "dev"]


def test_trailing_newline_does_not_match():
    matcher = DomainMatcher(["dev"])
    assert not matcher("myapp.dev\n")
    assert not matcher("dev\n")
