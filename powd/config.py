# -*- coding: utf-8 -
#
# This file is part of powd released under the MIT license.
# See the NOTICE for more information.

import copy
import json
import os
import sys
import textwrap

from powd import lookup
from powd.domains import DomainMatcher
from powd.errors import ConfigError
from powd.glogging import LoggerRegistry
from powd.roots import ApplicationRootResolver

KNOWN_SETTINGS = []

DEFAULT_DOMAINS = ["dev"]


def wrap_method(func):
    def _wrapped(instance, *args, **kwargs):
        return func(*args, **kwargs)
    return _wrapped


def make_settings(ignore=None):
    settings = {}
    ignore = ignore or ()
    for s in KNOWN_SETTINGS:
        setting = s()
        if setting.name in ignore:
            continue
        settings[setting.name] = setting.copy()
    return settings


class Config(object):
    """\
    Resolved powd options.

    Each setting takes, in order of precedence, the value given in
    ``overrides``, the value of its environment variable in ``env``
    (``os.environ`` when omitted), or its built-in default. The
    configuration is read-only once built.
    """

    def __init__(self, overrides=None, env=None):
        self.settings = make_settings()
        self.env = dict(os.environ if env is None else env)
        self.load(overrides or {})

        self.dns_domain_matcher = DomainMatcher(self.domains)
        self.http_domain_matcher = DomainMatcher(self.all_domains)
        self.loggers = LoggerRegistry(self.log_root, level=self.log_level)
        self._frozen = True

    def load(self, overrides):
        for k in overrides:
            if k not in self.settings:
                raise ConfigError("No configuration setting for: %s" % k)

        for name, setting in self.settings.items():
            value = overrides.get(name)
            if value is None:
                value = setting.from_env(self.env)
            if value is None:
                continue
            try:
                setting.set(value)
            except (ValueError, TypeError) as e:
                raise ConfigError("Invalid value for %s: %r (%s)" % (
                    name, value, e)) from e

    def __getattr__(self, name):
        if name not in self.__dict__.get("settings", {}):
            raise AttributeError("No configuration setting for: %s" % name)
        value = self.settings[name].get()
        if isinstance(value, list):
            return list(value)
        return value

    def __setattr__(self, name, value):
        if self.__dict__.get("_frozen") or \
                name in self.__dict__.get("settings", {}):
            raise AttributeError("Invalid access!")
        super().__setattr__(name, value)

    @property
    def all_domains(self):
        return self.domains + self.ext_domains

    @property
    def inherited_env(self):
        """Environment handed to processes spawned on behalf of powd."""
        return dict(self.env)

    @property
    def log(self):
        return self.get_logger("powd")

    def get_logger(self, name):
        return self.loggers.get(name)

    def projected_settings(self):
        for s in KNOWN_SETTINGS:
            if s.projected:
                yield self.settings[s.name]

    def to_dict(self):
        data = {}
        for setting in self.projected_settings():
            value = setting.get()
            if isinstance(value, list):
                value = list(value)
            data[setting.name] = value
        return data

    def to_json(self):
        return json.dumps(self.to_dict())

    def to_env(self):
        lines = []
        for setting in self.projected_settings():
            value = setting.get()
            if isinstance(value, list):
                value = ",".join(value)
            lines.append("%s=%s" % (setting.env, shell_quote(str(value))))
        return "\n".join(lines)

    async def application_roots(self):
        resolver = ApplicationRootResolver(self.host_root, log=self.log)
        return await resolver.gather()

    async def find_application_root_for_host(self, host):
        roots = await self.application_roots()
        return lookup.find_application_root_for_host(
            host, self.all_domains, roots)

    @classmethod
    def from_user_config(cls, overrides=None, path=None):
        """\
        Build a configuration from the environment merged with the
        variables exported by the user configuration script.
        """
        from powd.userenv import USER_CONFIG_PATH, load_user_env

        env = dict(os.environ)
        env.update(load_user_env(path or USER_CONFIG_PATH))
        return cls(overrides, env=env)

    def __repr__(self):
        return "<Config %s>" % self.to_json()


def shell_quote(value):
    return "'%s'" % value.replace("'", "'\\''")


class SettingMeta(type):
    def __new__(cls, name, bases, attrs):
        super_new = super().__new__
        parents = [b for b in bases if isinstance(b, SettingMeta)]
        if not parents:
            return super_new(cls, name, bases, attrs)

        attrs["order"] = len(KNOWN_SETTINGS)
        attrs["validator"] = wrap_method(attrs["validator"])

        new_class = super_new(cls, name, bases, attrs)
        new_class.fmt_desc(attrs.get("desc", ""))
        KNOWN_SETTINGS.append(new_class)
        return new_class

    def fmt_desc(cls, desc):
        desc = textwrap.dedent(desc).strip()
        setattr(cls, "desc", desc)
        setattr(cls, "short", desc.splitlines()[0])


class Setting(metaclass=SettingMeta):
    name = None
    value = None
    section = None
    env = None
    env_legacy = None
    projected = True
    validator = None
    default = None
    short = None
    desc = None

    def __init__(self):
        if self.default is not None:
            self.set(self.default)

    def from_env(self, env):
        for key in (self.env, self.env_legacy):
            if key and env.get(key):
                return env[key]
        return None

    def copy(self):
        return copy.copy(self)

    def get(self):
        return self.value

    def set(self, val):
        assert callable(self.validator), "Invalid validator: %s" % self.name
        self.value = self.validator(val)

    def __repr__(self):
        return "<%s.%s object at %x with value %r>" % (
            self.__class__.__module__,
            self.__class__.__name__,
            id(self),
            self.value,
        )


def validate_pos_int(val):
    if isinstance(val, bool):
        raise TypeError("Not an integer: %r" % val)
    if not isinstance(val, int):
        if not isinstance(val, str):
            raise TypeError("Not an integer: %r" % val)
        val = val.strip()
        if not (val.isascii() and val.isdigit()):
            raise ValueError("Not a decimal integer: %r" % val)
        val = int(val, 10)
    if val < 1:
        raise ValueError("Value must be positive: %s" % val)
    return val


def validate_string(val):
    if val is None:
        return None
    if not isinstance(val, str):
        raise TypeError("Not a string: %s" % val)
    return val.strip()


def validate_path(val):
    val = validate_string(val)
    if val is None:
        return None
    return os.path.abspath(os.path.expanduser(val))


def validate_list_string(val):
    if not val:
        return []

    # comma separated string
    if isinstance(val, str):
        val = val.split(",")
    elif not isinstance(val, (list, tuple)):
        raise TypeError("Not a list or a string: %r" % val)

    items = []
    for v in val:
        v = validate_string(v)
        if v:
            items.append(v)
    return items


def validate_domains(val):
    return validate_list_string(val) or list(DEFAULT_DOMAINS)


def validate_log_level(val):
    val = validate_string(val)
    if val is None:
        return None
    return val.lower()


class Bin(Setting):
    name = "bin"
    section = "Pow"
    env = "POW_BIN"
    validator = validate_path
    default = os.path.join(os.path.dirname(sys.executable), "powd")
    desc = """\
        Path to the powd executable.

        Used when installing launch scripts and by collaborators that need
        to re-run powd.
        """


class DstPort(Setting):
    name = "dst_port"
    section = "Pow"
    env = "POW_DST_PORT"
    validator = validate_pos_int
    default = 80
    desc = """\
        The public port HTTP traffic is forwarded from.
        """


class HttpPort(Setting):
    name = "http_port"
    section = "Pow"
    env = "POW_HTTP_PORT"
    validator = validate_pos_int
    default = 20559
    desc = """\
        The port the HTTP server listens on.
        """


class DnsPort(Setting):
    name = "dns_port"
    section = "Pow"
    env = "POW_DNS_PORT"
    validator = validate_pos_int
    default = 20560
    desc = """\
        The port the DNS server listens on.
        """


class Timeout(Setting):
    name = "timeout"
    section = "Pow"
    env = "POW_TIMEOUT"
    validator = validate_pos_int
    default = 15 * 60
    desc = """\
        Seconds an application may stay idle before its workers are reaped.
        """


class Workers(Setting):
    name = "workers"
    section = "Pow"
    env = "POW_WORKERS"
    validator = validate_pos_int
    default = 2
    desc = """\
        The maximum number of worker processes per application.
        """


class Domains(Setting):
    name = "domains"
    section = "Pow"
    env = "POW_DOMAINS"
    env_legacy = "POW_DOMAIN"
    validator = validate_domains
    default = DEFAULT_DOMAINS
    desc = """\
        Top-level domains answered by the DNS server and served over HTTP.

        A comma separated string or a list. The first domain is reported
        for requests served by the ``default`` application.
        """


class ExtDomains(Setting):
    name = "ext_domains"
    section = "Pow"
    env = "POW_EXT_DOMAINS"
    validator = validate_list_string
    default = []
    desc = """\
        Additional domains served over HTTP but not answered by the DNS
        server.
        """


class HostRoot(Setting):
    name = "host_root"
    section = "Pow"
    env = "POW_HOST_ROOT"
    validator = validate_path
    default = "~/Library/Application Support/Pow/Hosts"
    desc = """\
        Directory holding one symlink or directory per application.
        """


class LogRoot(Setting):
    name = "log_root"
    section = "Pow"
    env = "POW_LOG_ROOT"
    validator = validate_path
    default = "~/Library/Logs/Pow"
    desc = """\
        Directory log files are written to, one ``<name>.log`` per logger.
        """


class RvmPath(Setting):
    name = "rvm_path"
    section = "Pow"
    env = "POW_RVM_PATH"
    validator = validate_path
    default = "~/.rvm/scripts/rvm"
    desc = """\
        Path to the rvm script sourced before booting Ruby applications.
        """


class LogLevel(Setting):
    name = "log_level"
    section = "Logging"
    env = "POW_LOG_LEVEL"
    projected = False
    validator = validate_log_level
    default = "info"
    desc = """\
        The granularity of log output.

        Valid level names are: debug, info, warning, error, critical.
        """
