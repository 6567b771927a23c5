"""Basic operating system information for Linux hosts."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path

LINUX = "linux"
WINDOWS = "windows"

OS_RELEASE = Path("/etc/os-release")
ORACLE_RELEASE = Path("/etc/oracle-release")
REDHAT_RELEASE = Path("/etc/redhat-release")

_ENTERPRISE_VERSION_RE = re.compile(r"\d+(\.\d+)?(\.\d+)?")

_ARCHITECTURE_ALIASES = {
    "amd64": "x86_64",
    "64-bit": "x86_64",
    "i386": "x86_32",
    "i686": "x86_32",
    "32-bit": "x86_32",
    "noarch": "all",
}


@dataclass
class OSInfo:
    """Describes an operating system."""

    hostname: str = ""
    long_name: str = ""
    short_name: str = ""
    version: str = ""
    kernel_version: str = ""
    kernel_release: str = ""
    architecture: str = ""


def architecture(arch: str) -> str:
    """Return a standardised name for an architecture string."""
    return _ARCHITECTURE_ALIASES.get(arch, arch)


def parse_os_release(release_details: str) -> OSInfo:
    """Parse the contents of an os-release file."""
    info = OSInfo()
    fields = {"PRETTY_NAME": "long_name", "VERSION_ID": "version", "ID": "short_name"}

    for line in release_details.splitlines():
        entry = line.split("=")
        key = entry[0]
        if not key or len(entry) < 2:
            continue
        attr = fields.get(key)
        if attr is not None:
            setattr(info, attr, entry[1].strip('"'))
        if info.long_name and info.version and info.short_name:
            break

    if not info.short_name:
        info.short_name = LINUX
    return info


def parse_enterprise_release(release_details: str) -> OSInfo:
    """Parse the contents of a redhat-release style file."""
    if "CentOS" in release_details:
        short_name = "centos"
    elif "Red Hat" in release_details:
        short_name = "rhel"
    elif "Oracle" in release_details:
        short_name = "ol"
    else:
        short_name = ""

    match = _ENTERPRISE_VERSION_RE.search(release_details)
    return OSInfo(
        short_name=short_name,
        long_name=release_details.replace(" release ", " ", 1),
        version=match.group(0) if match else "",
    )


def _read_release() -> OSInfo:
    candidates = (
        (OS_RELEASE, parse_os_release),
        (ORACLE_RELEASE, parse_enterprise_release),
        (REDHAT_RELEASE, parse_enterprise_release),
    )
    for path, parser in candidates:
        if path.exists():
            try:
                return parser(path.read_text(encoding="utf-8", errors="replace"))
            except OSError:
                break
    return OSInfo(short_name=LINUX)


def get() -> OSInfo:
    """Report information about the running system."""
    info = _read_release()
    uts = os.uname()
    info.hostname = uts.nodename.rstrip("\x00")
    info.architecture = architecture(uts.machine.rstrip("\x00"))
    info.kernel_version = uts.version.rstrip("\x00")
    info.kernel_release = uts.release.rstrip("\x00")
    return info