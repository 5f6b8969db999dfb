# -*- coding: utf-8 -
#
# This file is part of powd released under the MIT license.
# See the NOTICE for more information.

import logging
import os
import threading


class LazyWriter(object):

    """
    File-like object that opens a file lazily when it is first written
    to. Missing parent directories are created at that point.
    """

    def __init__(self, filename, mode='a'):
        self.filename = filename
        self.fileobj = None
        self.lock = threading.Lock()
        self.mode = mode

    def open(self):
        if self.fileobj is None:
            with self.lock:
                if self.fileobj is None:
                    dirname = os.path.dirname(self.filename)
                    if dirname:
                        os.makedirs(dirname, exist_ok=True)
                    self.fileobj = open(self.filename, self.mode)
        return self.fileobj

    def close(self):
        if self.fileobj:
            with self.lock:
                if self.fileobj:
                    self.fileobj.close()
                    self.fileobj = None

    def write(self, text):
        fileobj = self.open()
        fileobj.write(text)
        fileobj.flush()

    def writelines(self, text):
        fileobj = self.open()
        fileobj.writelines(text)
        fileobj.flush()

    def flush(self):
        if self.fileobj:
            self.fileobj.flush()

    def isatty(self):
        return bool(self.fileobj and self.fileobj.isatty())


class Logger(object):

    LOG_LEVELS = {
        "critical": logging.CRITICAL,
        "error": logging.ERROR,
        "warning": logging.WARNING,
        "info": logging.INFO,
        "debug": logging.DEBUG
    }

    log_fmt = r"%(asctime)s [%(process)d] [%(levelname)s] %(message)s"
    datefmt = r"%Y-%m-%d %H:%M:%S"

    def __init__(self, name, log_root, level="info"):
        self.name = name
        self.path = os.path.join(log_root, "%s.log" % name)
        # one logger per handle, outside the global registry, so two
        # configurations never share handlers
        self.powd_log = logging.Logger("powd.%s" % name)
        self.writer = None
        self.setup(level)

    def setup(self, level):
        self.powd_log.setLevel(self.LOG_LEVELS.get(level.lower(), logging.INFO))
        self._set_handler(self.powd_log, self.path,
                          logging.Formatter(self.log_fmt, self.datefmt))

    def critical(self, msg, *args, **kwargs):
        self.powd_log.critical(msg, *args, **kwargs)

    def error(self, msg, *args, **kwargs):
        self.powd_log.error(msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs):
        self.powd_log.warning(msg, *args, **kwargs)

    def info(self, msg, *args, **kwargs):
        self.powd_log.info(msg, *args, **kwargs)

    def debug(self, msg, *args, **kwargs):
        self.powd_log.debug(msg, *args, **kwargs)

    def exception(self, msg, *args, **kwargs):
        self.powd_log.exception(msg, *args, **kwargs)

    def log(self, lvl, msg, *args, **kwargs):
        if isinstance(lvl, str):
            lvl = self.LOG_LEVELS.get(lvl.lower(), logging.INFO)
        self.powd_log.log(lvl, msg, *args, **kwargs)

    def reopen_files(self):
        # the next write reopens the file, picking up a rotated path
        if self.writer is not None:
            self.writer.close()

    def close(self):
        h = self._get_powd_handler(self.powd_log)
        if h:
            self.powd_log.removeHandler(h)
            h.close()
        if self.writer is not None:
            self.writer.close()

    def _get_powd_handler(self, log):
        for h in log.handlers:
            if getattr(h, "_powd", False):
                return h

    def _set_handler(self, log, output, fmt):
        # remove previous powd log handler
        h = self._get_powd_handler(log)
        if h:
            log.removeHandler(h)
            h.close()

        self.writer = LazyWriter(output, 'a')
        h = logging.StreamHandler(self.writer)
        h.setFormatter(fmt)
        h._powd = True
        log.addHandler(h)

    def __repr__(self):
        return "<Logger %s -> %s>" % (self.name, self.path)


class LoggerRegistry(object):
    """\
    Lazily created, per-name loggers rooted at ``log_root``.

    ``get`` is idempotent: asking twice for the same name returns the
    same handle.
    """

    def __init__(self, log_root, level="info", logger_class=Logger):
        self.log_root = log_root
        self.level = level
        self.logger_class = logger_class
        self.loggers = {}
        self.lock = threading.Lock()

    def get(self, name):
        with self.lock:
            logger = self.loggers.get(name)
            if logger is None:
                logger = self.logger_class(name, self.log_root, self.level)
                self.loggers[name] = logger
            return logger

    def reopen_files(self):
        for logger in list(self.loggers.values()):
            logger.reopen_files()

    def close(self):
        with self.lock:
            for logger in self.loggers.values():
                logger.close()
            self.loggers.clear()

    def __contains__(self, name):
        return name in self.loggers

    def __len__(self):
        return len(self.loggers)
