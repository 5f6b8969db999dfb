# -*- coding: utf-8 -
#
# This file is part of powd released under the MIT license.
# See the NOTICE for more information.

version_info = (0, 4, 0)
__version__ = ".".join([str(v) for v in version_info])
SERVER = "powd"
SERVER_SOFTWARE = "%s/%s" % (SERVER, __version__)
