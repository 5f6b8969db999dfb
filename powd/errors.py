# -*- coding: utf-8 -
#
# This file is part of powd released under the MIT license.
# See the NOTICE for more information.


class PowError(Exception):
    """Base exception for all powd errors."""


class ConfigError(PowError):
    """ Exception raised on config error """


class ConfigLoadError(ConfigError):
    """Raised when the user configuration script fails to evaluate."""

    def __init__(self, path, status=None, output=None):
        self.path = path
        self.status = status
        self.output = output
        msg = "Failed to load user configuration: %s" % path
        if status is not None:
            msg = "%s (exit status %s)" % (msg, status)
        super().__init__(msg)


class DirectoryError(PowError):
    """Raised when the host root cannot be created or listed."""

    def __init__(self, path, reason=None):
        self.path = path
        self.reason = reason
        msg = "Unable to read host root %r" % path
        if reason:
            msg = "%s: %s" % (msg, reason)
        super().__init__(msg)
