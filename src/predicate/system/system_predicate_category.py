import os
import platform
import shutil
import sys
from typing import Dict, List

from predicate.predicate_category import PredicateCategory
from predicate.predicate_definition import PredicateDefinition
from predicate.predicate_operand import OperandKind


STRING = OperandKind.STRING


class SystemPredicateCategory(PredicateCategory):
    """
    Predicates about the running system.

    Operating system and architecture names are compared case-insensitively against
    canonical identifiers (``linux``, ``macos``, ``windows``, ``x86_64``, ``aarch64``,
    ...) so the same script works regardless of how the platform spells them.
    """

    # sys.platform prefixes mapped to canonical OS names
    OS_NAMES = {
        "linux": "linux",
        "darwin": "macos",
        "win32": "windows",
        "cygwin": "windows",
        "freebsd": "freebsd",
        "netbsd": "netbsd",
        "openbsd": "openbsd",
        "dragonfly": "dragonfly",
        "sunos": "solaris",
        "aix": "aix",
        "android": "android",
        "ios": "ios",
    }

    # platform.machine() spellings mapped to canonical architecture names
    ARCH_NAMES = {
        "amd64": "x86_64",
        "x64": "x86_64",
        "arm64": "aarch64",
        "armv8l": "aarch64",
        "i386": "x86",
        "i486": "x86",
        "i586": "x86",
        "i686": "x86",
        "armv6l": "arm",
        "armv7l": "arm",
        "ppc64le": "powerpc64",
        "ppc64": "powerpc64",
        "riscv64": "riscv64",
        "s390x": "s390x",
    }

    def get_name(self) -> str:
        return "system"

    def get_description(self) -> str:
        return "Operating system, architecture, command and terminal checks"

    def _create_predicate_definitions(self) -> Dict[str, PredicateDefinition]:
        """
        Create predicate definitions for this category.

        Returns:
            Dictionary mapping predicate names to their definitions
        """
        return dict([
            self._define(
                "os", self._os_is, [("name", STRING)],
                "Operating system is the given name (linux, macos, windows, freebsd, netbsd, openbsd, ...)"
            ),
            self._define(
                "command-exists", self._command_exists, [("command", STRING)],
                "Command is found on PATH and is executable"
            ),
            self._define(
                "arch", self._arch_is, [("name", STRING)],
                "Machine architecture is the given name (x86_64, aarch64, x86, arm, ...)"
            ),
            self._define(
                "fd-tty", self._fd_is_tty, [("fd", OperandKind.INTEGER)],
                "File descriptor is open on a terminal (-t)"
            ),
        ])

    @classmethod
    def current_os_names(cls) -> List[str]:
        """
        Get the names the running operating system answers to, lower case.

        Returns:
            Canonical name first, followed by the raw platform name if it differs
        """
        platform_name = sys.platform
        canonical = platform_name
        for prefix, name in cls.OS_NAMES.items():
            if platform_name.startswith(prefix):
                canonical = name
                break

        names = [canonical]
        system_name = platform.system().lower()
        if system_name and system_name not in names:
            names.append(system_name)

        return names

    @classmethod
    def current_arch(cls) -> str:
        """
        Get the canonical name of the machine architecture, lower case.

        Returns:
            Architecture name
        """
        machine = platform.machine().lower()
        return cls.ARCH_NAMES.get(machine, machine)

    def _os_is(self, name: str) -> bool:
        return name.lower() in self.current_os_names()

    def _arch_is(self, name: str) -> bool:
        wanted = name.lower()
        return self.ARCH_NAMES.get(wanted, wanted) == self.current_arch()

    def _command_exists(self, command: str) -> bool:
        if not command:
            return False

        return shutil.which(command) is not None

    def _fd_is_tty(self, fd: int) -> bool:
        try:
            return os.isatty(fd)

        except (OSError, OverflowError):
            return False
