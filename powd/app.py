# -*- coding: utf-8 -
#
# This file is part of powd released under the MIT license.
# See the NOTICE for more information.

import argparse
import asyncio
import sys

from powd import __version__
from powd.config import Config
from powd.errors import PowError
from powd.userenv import USER_CONFIG_PATH


class Application(object):
    """\
    The ``powd`` command line interface: boots the configuration from
    the environment and the user configuration script, then reports it
    or resolves a host against the host root.
    """

    def __init__(self, usage=None, prog=None):
        self.usage = usage
        self.prog = prog
        self.cfg = None

    def parser(self):
        parser = argparse.ArgumentParser(usage=self.usage, prog=self.prog)
        parser.add_argument("-v", "--version", action="version",
                            version="%(prog)s (version " + __version__ + ")")
        parser.add_argument("-c", "--config", dest="config",
                            default=USER_CONFIG_PATH, metavar="FILE",
                            help="user configuration script [%(default)s]")
        group = parser.add_mutually_exclusive_group()
        group.add_argument("--print-config", dest="print_config",
                           action="store_true",
                           help="print the configuration as shell variables")
        group.add_argument("--json", dest="json", action="store_true",
                           help="print the configuration as JSON")
        group.add_argument("--lookup", dest="lookup", metavar="HOST",
                           help="print the domain and application root "
                                "serving HOST")
        return parser

    def load_config(self, args):
        self.cfg = Config.from_user_config(path=args.config)

    def run(self, argv=None):
        args = self.parser().parse_args(argv)
        try:
            self.load_config(args)
            if args.lookup:
                return self.lookup(args.lookup)
            if args.json:
                print(self.cfg.to_json())
            else:
                print(self.cfg.to_env())
        except PowError as e:
            sys.stderr.write("Error: %s\n" % e)
            sys.stderr.flush()
            return 1
        return 0

    def lookup(self, host):
        result = asyncio.run(self.cfg.find_application_root_for_host(host))
        if result is None:
            sys.stderr.write("no match for %s\n" % host)
            return 1
        print("%s %s" % (result.domain, result.root))
        return 0


def run():
    """\
    The ``powd`` command line runner.
    """
    sys.exit(Application("%(prog)s [OPTIONS]").run())
