#
# This file is part of powd released under the MIT license.
# See the NOTICE for more information.


class MockLog:
    def __init__(self):
        self.messages = []

    def debug(self, msg, *args, **kw):
        self.messages.append(("debug", msg % args))

    def info(self, msg, *args, **kw):
        self.messages.append(("info", msg % args))

    def warning(self, msg, *args, **kw):
        self.messages.append(("warning", msg % args))

    def error(self, msg, *args, **kw):
        self.messages.append(("error", msg % args))

    def levels(self, level):
        return [m for lvl, m in self.messages if lvl == level]
