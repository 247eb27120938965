"""Tree walker: enumerate the files of a repository."""

from __future__ import annotations

import fnmatch
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from repomedic.audit.constants import BINARY_EXTENSIONS, IGNORED_DIRS
from repomedic.audit.types import FileEntry, ScanWarning
from repomedic.config import AuditSettings
from repomedic.exceptions import PathNotFound, RootAccessError

logger = logging.getLogger("repomedic.audit")


@dataclass(frozen=True)
class WalkResult:
    root: Path
    files: tuple[FileEntry, ...]
    large_files: tuple[str, ...]
    warnings: tuple[ScanWarning, ...]
    system_errors: tuple[str, ...]
    dirs_traversed: int
    root_dirs: tuple[str, ...] = ()  # every directory directly under the root, ignored ones included


def is_ignored(name: str, rel_path: str, extra_ignores: tuple[str, ...] = ()) -> bool:
    if name in IGNORED_DIRS:
        return True
    return any(
        fnmatch.fnmatch(name, pattern) or fnmatch.fnmatch(rel_path, pattern)
        for pattern in extra_ignores
    )


def sniff_text(path: Path, size: int, sniff_bytes: int) -> bool:
    """Extension first, then a NUL-byte check on the head of the file.

    Only the first ``sniff_bytes`` are read, whatever the file size.
    """
    if path.suffix.lower() in BINARY_EXTENSIONS:
        return False
    if size == 0:
        return True
    with open(path, "rb") as fh:
        head = fh.read(sniff_bytes)
    return b"\x00" not in head


def resolve_root(root: str | Path) -> Path:
    p = Path(root).expanduser()
    try:
        p = p.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise PathNotFound(str(root)) from exc
    if not p.is_dir():
        raise PathNotFound(str(root))
    return p


def walk(root: str | Path, settings: AuditSettings | None = None) -> WalkResult:
    """Walk ``root`` depth-first in sorted order.

    Symlinks are never followed. Per-entry permission problems become
    warnings; only a missing or unlistable root raises.
    """
    settings = settings or AuditSettings()
    base = resolve_root(root)

    try:
        with os.scandir(base) as it:
            top = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        raise RootAccessError(str(base), exc.strerror or str(exc)) from exc

    files: list[FileEntry] = []
    large_files: list[str] = []
    warnings: list[ScanWarning] = []
    system_errors: list[str] = []
    root_dirs: list[str] = []
    dirs_traversed = 1

    # (entries of a directory, relative prefix, depth); entries pre-sorted
    stack: list[tuple[list[os.DirEntry], str, int]] = [(top, "", 0)]
    while stack:
        entries, prefix, depth = stack.pop()
        pending: list[tuple[list[os.DirEntry], str, int]] = []
        for entry in entries:
            rel = f"{prefix}{entry.name}"
            try:
                if entry.is_symlink():
                    logger.debug("Skipping symlink %s", rel)
                    continue
                if entry.is_dir(follow_symlinks=False):
                    if not prefix:
                        root_dirs.append(entry.name)
                    if is_ignored(entry.name, rel, settings.extra_ignores):
                        continue
                    if depth + 1 > settings.max_depth:
                        logger.debug("Depth limit reached at %s", rel)
                        continue
                    with os.scandir(entry.path) as it:
                        children = sorted(it, key=lambda e: e.name)
                    dirs_traversed += 1
                    pending.append((children, f"{rel}/", depth + 1))
                    continue
                if not entry.is_file(follow_symlinks=False):
                    continue
                if settings.extra_ignores and is_ignored(entry.name, rel, settings.extra_ignores):
                    continue
                size = entry.stat(follow_symlinks=False).st_size
                is_text = sniff_text(Path(entry.path), size, settings.sniff_bytes)
            except PermissionError as exc:
                warnings.append(ScanWarning(rel, "permission_denied", exc.strerror or str(exc)))
                logger.warning("Permission denied: %s", rel)
                continue
            except OSError as exc:
                system_errors.append(f"{rel}: {exc.strerror or exc}")
                logger.error("I/O error under %s: %s", rel, exc)
                continue

            if size > settings.large_file_bytes:
                large_files.append(rel)
                if not is_text:
                    continue
            files.append(FileEntry(path=rel, size=size, is_text=is_text))

        # Reverse so the lexically first subdirectory is walked next
        stack.extend(reversed(pending))

    files.sort(key=lambda f: f.path)
    large_files.sort()
    logger.debug("Walked %s: %d files, %d dirs", base, len(files), dirs_traversed)
    return WalkResult(
        root=base,
        files=tuple(files),
        large_files=tuple(large_files),
        warnings=tuple(warnings),
        system_errors=tuple(system_errors),
        dirs_traversed=dirs_traversed,
        root_dirs=tuple(root_dirs),
    )
