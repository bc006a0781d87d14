"""
Output sinks.

A sink is the single destination a logger tree writes to. It exposes
``write(line)`` and owns the lock that serialises writers: every logger
derived from the same root shares the sink object, and therefore the lock,
so records from a parent and its children can never interleave.

Sinks:
    StreamSink: A text stream, standard output by default
    RotatingFileWriter: A file rotated by size and pruned by age, backed by
        the standard library's ``RotatingFileHandler``

Writes may raise. The logger core swallows those errors, so the policy
lives in one place and the sinks stay plain.
"""

import glob
import gzip
import logging
import os
import re
import shutil
import sys
import threading
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, TextIO

from lumberlog.core.exceptions.custom_exceptions import ConfigurationError

diagnostics = logging.getLogger("lumberlog")

_MEGABYTE = 1024 * 1024
_SECONDS_PER_DAY = 24 * 60 * 60


class Sink:
    """Base class for line-oriented destinations."""

    def __init__(self) -> None:
        self.lock = threading.Lock()

    def write(self, line: str) -> None:
        raise NotImplementedError

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


class StreamSink(Sink):
    """
    Write lines to a text stream.

    When no stream is given, ``sys.stdout`` is looked up on every write so
    that a replaced standard output (test capture, daemonisation) is honoured.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        super().__init__()
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write(self, line: str) -> None:
        stream = self.stream
        stream.write(line + "\n")
        stream.flush()

    def flush(self) -> None:
        self.stream.flush()


def _gzip_namer(name: str) -> str:
    return name + ".gz"


def _gzip_rotator(source: str, dest: str) -> None:
    with open(source, "rb") as f_in, gzip.open(dest, "wb") as f_out:
        shutil.copyfileobj(f_in, f_out)
    os.remove(source)


class _RotationHandler(RotatingFileHandler):
    """RotatingFileHandler that also prunes backups by age after rollover."""

    def __init__(self, filename: str, max_bytes: int, backup_count: int, max_age_days: int, compress: bool) -> None:
        super().__init__(
            filename,
            mode="a",
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
            delay=False,
        )
        self.max_age_days = max_age_days
        if compress:
            self.namer = _gzip_namer
            self.rotator = _gzip_rotator

    def doRollover(self) -> None:
        super().doRollover()
        diagnostics.debug("rotated log file %s", self.baseFilename)
        self.prune_expired()

    def backup_paths(self):
        base = Path(self.baseFilename)
        numbered = re.compile(re.escape(base.name) + r"\.\d+(\.gz)?")
        return sorted(
            p
            for p in base.parent.glob(glob.escape(base.name) + ".*")
            if numbered.fullmatch(p.name)
        )

    def prune_expired(self) -> None:
        if self.max_age_days <= 0:
            return
        cutoff = time.time() - self.max_age_days * _SECONDS_PER_DAY
        for path in self.backup_paths():
            try:
                if path.stat().st_mtime < cutoff:
                    path.unlink()
                    diagnostics.debug("removed expired backup %s", path)
            except FileNotFoundError:
                continue


class RotatingFileWriter(Sink):
    """
    Append lines to a file with size-based rotation.

    Args:
        filename: Path of the active log file; parent directories are
            created as needed
        max_size_mb: Roll over once the file would exceed this many MiB
        max_backups: Number of rotated files to keep
        max_age_days: Delete rotated files older than this (0 keeps them)
        compress: Gzip rotated files

    Raises:
        ConfigurationError: If the file cannot be opened for appending
    """

    def __init__(
        self,
        filename: str,
        max_size_mb: int = 100,
        max_backups: int = 3,
        max_age_days: int = 28,
        compress: bool = False,
    ) -> None:
        super().__init__()
        path = Path(filename)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self._handler = _RotationHandler(
                str(path),
                max_bytes=max_size_mb * _MEGABYTE,
                backup_count=max_backups,
                max_age_days=max_age_days,
                compress=compress,
            )
        except OSError as e:
            raise ConfigurationError(
                f"Cannot open log file {filename}: {e}",
                error_code="CONFIG_UNUSABLE_OUTPUT_PATH",
                details={"output_path": filename},
            ) from e
        self._handler.prune_expired()
        diagnostics.debug(
            "opened rotating log file %s (max %d MiB, %d backups)",
            path,
            max_size_mb,
            max_backups,
        )

    @property
    def filename(self) -> str:
        return self._handler.baseFilename

    def write(self, line: str) -> None:
        handler = self._handler
        record = logging.makeLogRecord({"msg": line})
        if handler.shouldRollover(record):
            handler.doRollover()
        handler.stream.write(line + handler.terminator)
        handler.stream.flush()

    def flush(self) -> None:
        self._handler.flush()

    def close(self) -> None:
        self._handler.close()
