"""Best-effort recursive deletion of an ordered set of paths.

Entries that are already gone count as deleted. Hard failures do not stop the
loop: every reachable entry is attempted, then all failures are raised together
as a DeletionError. Nothing is rolled back.
"""

from collections.abc import Callable, Iterable
from pathlib import Path


class DeletionError(OSError):
    """Raised when one or more paths could not be deleted."""

    def __init__(self, failures: list[tuple[Path, OSError]]) -> None:
        """Initialize with (path, cause) pairs in the order they failed."""
        self.failures = failures
        details = "; ".join(f"{path}: {cause.strerror or cause}" for path, cause in failures)
        super().__init__(f"failed to delete {len(failures)} path(s): {details}")


def _delete_entry(path: Path, failures: list[tuple[Path, OSError]]) -> None:
    """Delete a file, symlink or directory tree, recording hard failures.

    A directory is only removed once all of its children are gone, so a
    failure deep in the tree is reported once instead of for every ancestor.
    """
    try:
        if path.is_dir() and not path.is_symlink():
            failed_before = len(failures)
            for child in path.iterdir():
                _delete_entry(child, failures)
            if len(failures) > failed_before:
                return
            path.rmdir()
        else:
            path.unlink()
    except FileNotFoundError:
        return
    except OSError as e:
        failures.append((path, e))


def delete_paths(
    paths: Iterable[Path],
    on_delete: Callable[[Path], None] | None = None,
) -> None:
    """Delete every path in order, recursing into directories.

    Args:
        paths: Paths to delete, in the order they must be attempted.
        on_delete: Called with each top-level path right before it is deleted.

    Raises:
        DeletionError: If any path could not be deleted for a reason other
            than already being absent. Raised after all paths were attempted.
    """
    failures: list[tuple[Path, OSError]] = []

    for path in paths:
        if on_delete is not None:
            on_delete(path)
        _delete_entry(path, failures)

    if failures:
        raise DeletionError(failures)
