# -*- coding: utf-8 -
#
# This file is part of powd released under the MIT license.
# See the NOTICE for more information.

"""
Application Root Scanning

Builds the ``{name: path}`` mapping of applications served by powd from
the entries of the host root. Each entry is either a directory or a
symlink to one; names are matched case-insensitively, so the mapping is
keyed by the lowercased entry name.

Entries that cannot be resolved (broken symlinks, unreadable targets,
plain files) are left out of the mapping without raising. Only a host
root that cannot be created or listed is an error.
"""

import asyncio
import os
import stat

from powd.errors import DirectoryError


class ApplicationRootResolver:
    """
    Scan a host root directory for application roots.

    One coroutine is started per directory entry; blocking filesystem
    calls are dispatched to the event loop's default executor. The
    mapping is assembled only after every entry has been processed.
    """

    def __init__(self, root, log=None):
        """
        Args:
            root: Path of the host root directory
            log: Optional logger used to report skipped entries
        """
        self.root = root
        self.log = log

    async def gather(self):
        """
        Return the application roots found under the host root.

        Raises:
            DirectoryError: If the host root cannot be created or listed
        """
        loop = asyncio.get_running_loop()

        try:
            await loop.run_in_executor(None, self._ensure_root)
            names = await loop.run_in_executor(None, os.listdir, self.root)
        except OSError as e:
            raise DirectoryError(self.root, e.strerror or str(e)) from e

        results = await asyncio.gather(
            *[self.resolve_entry(name) for name in names]
        )
        return self._merge(r for r in results if r is not None)

    async def resolve_entry(self, name):
        """
        Resolve one host root entry.

        Returns a ``(name, key, path)`` tuple, or None when the entry is
        not a usable application root.
        """
        loop = asyncio.get_running_loop()
        path = os.path.join(self.root, name)
        key = name.lower()

        try:
            st = await loop.run_in_executor(None, os.lstat, path)
        except OSError as e:
            self._skip(name, e)
            return None

        if stat.S_ISLNK(st.st_mode):
            try:
                real_path = await loop.run_in_executor(
                    None, os.path.realpath, path
                )
                target = await loop.run_in_executor(None, os.stat, real_path)
            except OSError as e:
                self._skip(name, e)
                return None

            if not stat.S_ISDIR(target.st_mode):
                self._skip(name, "target is not a directory")
                return None
            return (name, key, real_path)

        if stat.S_ISDIR(st.st_mode):
            return (name, key, path)

        return None

    def _ensure_root(self):
        os.makedirs(self.root, exist_ok=True)

    def _merge(self, entries):
        # names differing only by case collide on the same key: the
        # entry whose original name sorts first wins
        roots = {}
        owners = {}
        for name, key, path in sorted(entries):
            if key in roots:
                if self.log is not None:
                    self.log.warning(
                        "Ignoring %r in %s: conflicts with %r",
                        name, self.root, owners[key]
                    )
                continue
            roots[key] = path
            owners[key] = name
        return roots

    def _skip(self, name, reason):
        if self.log is not None:
            self.log.debug("Skipping %r in %s: %s", name, self.root, reason)


async def gather_application_roots(root, log=None):
    """Scan ``root`` and return its ``{name: path}`` mapping."""
    return await ApplicationRootResolver(root, log=log).gather()
