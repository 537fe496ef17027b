import glob
import logging
import os
import stat
import time
from pathlib import Path
from typing import Callable, Dict

from predicate.predicate_category import PredicateCategory
from predicate.predicate_definition import PredicateDefinition
from predicate.predicate_exceptions import PredicateUsageError
from predicate.predicate_operand import OperandKind


PATH = OperandKind.PATH
INTEGER = OperandKind.INTEGER


class FilePredicateCategory(PredicateCategory):
    """
    Filesystem predicates.

    Paths have a leading ``~`` expanded.  Apart from the symlink test, every predicate
    follows symbolic links to their target.  A path that does not exist, or that
    cannot be inspected at all, makes the predicate false rather than raising.
    """

    def __init__(self) -> None:
        """Initialize the file category."""
        super().__init__()
        self._logger = logging.getLogger("FilePredicateCategory")

    def get_name(self) -> str:
        return "file"

    def get_description(self) -> str:
        return "Filesystem entry checks (type, size, permissions, ownership, times)"

    def _create_predicate_definitions(self) -> Dict[str, PredicateDefinition]:
        """
        Create predicate definitions for this category.

        Returns:
            Dictionary mapping predicate names to their definitions
        """
        path = [("path", PATH)]
        two_paths = [("path1", PATH), ("path2", PATH)]
        path_bytes = [("path", PATH), ("bytes", INTEGER)]
        path_seconds = [("path", PATH), ("seconds", INTEGER)]

        return dict([
            self._define("exists", self._exists, path, "Path exists (-e)"),
            self._define("directory", self._mode_check(stat.S_ISDIR), path, "Path is a directory (-d)"),
            self._define("regular", self._mode_check(stat.S_ISREG), path, "Path is a regular file (-f)"),
            self._define("symlink", self._symlink, path, "Path is a symbolic link, not dereferenced (-h, -L)"),
            self._define("block-device", self._mode_check(stat.S_ISBLK), path, "Path is a block special file (-b)"),
            self._define(
                "character-device", self._mode_check(stat.S_ISCHR), path, "Path is a character special file (-c)"
            ),
            self._define("named-pipe", self._mode_check(stat.S_ISFIFO), path, "Path is a named pipe (FIFO) (-p)"),
            self._define("socket", self._mode_check(stat.S_ISSOCK), path, "Path is a socket (-S)"),
            self._define("non-empty", self._non_empty, path, "Path is a regular file with size greater than zero (-s)"),
            self._define("readable", self._access_check(os.R_OK), path, "Path is readable by this process (-r)"),
            self._define("writable", self._access_check(os.W_OK), path, "Path is writable by this process (-w)"),
            self._define("executable", self._access_check(os.X_OK), path, "Path is executable by this process (-x)"),
            self._define("has-suid", self._mode_bit(stat.S_ISUID), path, "Set-user-ID bit is set (-u)"),
            self._define("has-sgid", self._mode_bit(stat.S_ISGID), path, "Set-group-ID bit is set (-g)"),
            self._define("has-sticky", self._mode_bit(stat.S_ISVTX), path, "Sticky bit is set (-k)"),
            self._define(
                "owned-by-effective-user", self._owned_by_effective_user, path,
                "Path is owned by the effective user ID (-O)"
            ),
            self._define(
                "owned-by-effective-group", self._owned_by_effective_group, path,
                "Path is owned by the effective group ID (-G)"
            ),
            self._define(
                "has-same-inode", self._has_same_inode, two_paths,
                "Both paths refer to the same device and inode (-ef)"
            ),
            self._define("newer-than", self._newer_than, two_paths, "First path was modified after the second (-nt)"),
            self._define("older-than", self._older_than, two_paths, "First path was modified before the second (-ot)"),
            self._define(
                "exists-glob", self._exists_glob, [("pattern", OperandKind.STRING)],
                "At least one existing path matches the glob pattern"
            ),
            self._define(
                "non-empty-glob", self._non_empty_glob, [("pattern", OperandKind.STRING)],
                "At least one regular file matching the glob pattern has size greater than zero"
            ),
            self._define("size-gt", self._size_check(lambda size, n: size > n), path_bytes, "File size > bytes"),
            self._define("size-ge", self._size_check(lambda size, n: size >= n), path_bytes, "File size >= bytes"),
            self._define("size-lt", self._size_check(lambda size, n: size < n), path_bytes, "File size < bytes"),
            self._define("size-le", self._size_check(lambda size, n: size <= n), path_bytes, "File size <= bytes"),
            self._define("size-eq", self._size_check(lambda size, n: size == n), path_bytes, "File size == bytes"),
            self._define(
                "mtime-older-than", self._mtime_older_than, path_seconds,
                "File was last modified more than the given number of seconds ago"
            ),
            self._define(
                "mtime-newer-than", self._mtime_newer_than, path_seconds,
                "File was last modified less than the given number of seconds ago"
            ),
        ])

    @staticmethod
    def expand_path(path_str: str) -> Path:
        """
        Expand a leading ``~`` in a path operand.

        Args:
            path_str: Path exactly as supplied

        Returns:
            Expanded path
        """
        return Path(os.path.expanduser(path_str))

    def _stat(self, path_str: str, follow_symlinks: bool = True) -> os.stat_result | None:
        """
        Stat a path, treating every failure as absence.

        Args:
            path_str: Path exactly as supplied
            follow_symlinks: Whether to stat the link target rather than the link

        Returns:
            Stat result, or None if the path cannot be inspected
        """
        if not path_str:
            return None

        path = self.expand_path(path_str)
        try:
            return path.stat() if follow_symlinks else path.lstat()

        except (OSError, ValueError) as e:
            # ValueError covers paths with embedded NUL characters
            self._logger.debug("Cannot stat '%s': %s", path, str(e))
            return None

    def _require_non_negative(self, name: str, value: int) -> None:
        """Reject negative byte counts and durations."""
        if value < 0:
            raise PredicateUsageError(f"'{name}' must not be negative, got {value}")

    def _exists(self, path_str: str) -> bool:
        return self._stat(path_str) is not None

    def _symlink(self, path_str: str) -> bool:
        st = self._stat(path_str, follow_symlinks=False)
        return st is not None and stat.S_ISLNK(st.st_mode)

    def _non_empty(self, path_str: str) -> bool:
        st = self._stat(path_str)
        return st is not None and stat.S_ISREG(st.st_mode) and st.st_size > 0

    def _mode_check(self, test: Callable[[int], bool]) -> Callable[[str], bool]:
        """Build a handler testing the file type of the link target."""
        def check(path_str: str) -> bool:
            st = self._stat(path_str)
            return st is not None and test(st.st_mode)

        return check

    def _mode_bit(self, bit: int) -> Callable[[str], bool]:
        """Build a handler testing a single permission mode bit."""
        def check(path_str: str) -> bool:
            st = self._stat(path_str)
            return st is not None and (st.st_mode & bit) != 0

        return check

    def _access_check(self, mode: int) -> Callable[[str], bool]:
        """Build a handler testing access rights for this process."""
        def check(path_str: str) -> bool:
            if not path_str:
                return False

            try:
                return os.access(self.expand_path(path_str), mode)

            except ValueError:
                return False

        return check

    def _owned_by_effective_user(self, path_str: str) -> bool:
        st = self._stat(path_str)
        if st is None or not hasattr(os, "geteuid"):
            return False

        return st.st_uid == os.geteuid()

    def _owned_by_effective_group(self, path_str: str) -> bool:
        st = self._stat(path_str)
        if st is None or not hasattr(os, "getegid"):
            return False

        return st.st_gid == os.getegid()

    def _has_same_inode(self, path1: str, path2: str) -> bool:
        st1 = self._stat(path1)
        st2 = self._stat(path2)
        if st1 is None or st2 is None:
            return False

        return st1.st_dev == st2.st_dev and st1.st_ino == st2.st_ino

    def _newer_than(self, path1: str, path2: str) -> bool:
        st1 = self._stat(path1)
        st2 = self._stat(path2)
        return st1 is not None and st2 is not None and st1.st_mtime_ns > st2.st_mtime_ns

    def _older_than(self, path1: str, path2: str) -> bool:
        st1 = self._stat(path1)
        st2 = self._stat(path2)
        return st1 is not None and st2 is not None and st1.st_mtime_ns < st2.st_mtime_ns

    def _exists_glob(self, pattern: str) -> bool:
        for match in glob.iglob(os.path.expanduser(pattern), recursive=True):
            if self._stat(match) is not None:
                return True

        return False

    def _non_empty_glob(self, pattern: str) -> bool:
        for match in glob.iglob(os.path.expanduser(pattern), recursive=True):
            st = self._stat(match)
            if st is not None and stat.S_ISREG(st.st_mode) and st.st_size > 0:
                return True

        return False

    def _size_check(self, compare: Callable[[int, int], bool]) -> Callable[[str, int], bool]:
        """Build a handler comparing a file's size with a byte count."""
        def check(path_str: str, size_bytes: int) -> bool:
            self._require_non_negative("bytes", size_bytes)
            st = self._stat(path_str)
            return st is not None and compare(st.st_size, size_bytes)

        return check

    def _age_seconds(self, path_str: str) -> int | None:
        """
        Get whole seconds elapsed since the path was last modified.

        Returns:
            Age in seconds, or None if the path is missing or its mtime is in the future
        """
        st = self._stat(path_str)
        if st is None:
            return None

        age = time.time() - st.st_mtime
        if age < 0:
            return None

        return int(age)

    def _mtime_older_than(self, path_str: str, seconds: int) -> bool:
        self._require_non_negative("seconds", seconds)
        age = self._age_seconds(path_str)
        return age is not None and age > seconds

    def _mtime_newer_than(self, path_str: str, seconds: int) -> bool:
        self._require_non_negative("seconds", seconds)
        age = self._age_seconds(path_str)
        return age is not None and age < seconds
