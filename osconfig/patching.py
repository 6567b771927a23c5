"""Helpers for deciding which OS updates to apply and whether to reboot."""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Sequence

RPMQUERY = "/usr/bin/rpmquery"
PROC_STAT = "/proc/stat"

_REBOOT_PACKAGES = (
    # Common packages.
    "kernel", "glibc", "gnutls",
    # EL packages.
    "linux-firmware", "openssl-libs", "dbus",
    # Suse packages.
    "kernel-firmware", "libopenssl1_1", "libopenssl1_0_0", "dbus-1",
)

_INT_RE = re.compile(r"[+-]?\d+")


@dataclass
class PkgInfo:
    """A package name, architecture and version."""

    name: str = ""
    arch: str = ""
    version: str = ""


@dataclass
class ZypperPatch:
    """A zypper patch."""

    name: str = ""
    category: str = ""
    severity: str = ""
    summary: str = ""


def _parse_int(text: str) -> int | None:
    return int(text) if _INT_RE.fullmatch(text) else None


def get_btime(stat_path: str | Path) -> int:
    """Return the boot time recorded in a /proc/stat style file."""
    try:
        content = Path(stat_path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise OSError(f"error opening {stat_path}: {exc}") from exc

    btime = 0
    for line in content.splitlines():
        if not line.startswith("btime"):
            continue
        parts = line.split(" ", 1)
        if len(parts) != 2:
            raise ValueError(f"error parsing btime from {stat_path}: {line!r}")
        value = _parse_int(parts[1].strip())
        if value is None:
            raise ValueError(f"error parsing btime: {parts[1].strip()!r}")
        btime = value
        break

    if btime == 0:
        raise ValueError(f"could not find btime in {stat_path}")
    return btime


def rpm_reboot_required(pkgs: bytes | str, btime: int) -> bool:
    """Whether any listed install time is later than the boot time."""
    text = pkgs.decode("utf-8", errors="replace") if isinstance(pkgs, bytes) else pkgs
    for line in text.splitlines():
        itime = _parse_int(line)
        if itime is not None and itime > btime:
            return True
    return False


def rpm_reboot() -> bool:
    """Whether an rpm based system needs a reboot to finish installing updates."""
    args = [RPMQUERY, "--queryformat", "%{INSTALLTIME}\n", "--whatprovides", *_REBOOT_PACKAGES]
    try:
        # Non-zero exit codes are expected as some packages are not installed.
        result = subprocess.run(args, stdout=subprocess.PIPE, stderr=subprocess.DEVNULL, check=False)
    except OSError as exc:
        raise OSError(f"error running {RPMQUERY}: {exc}") from exc
    return rpm_reboot_required(result.stdout, get_btime(PROC_STAT))


def filter_packages(
    pkgs: Iterable[PkgInfo],
    exclusive_packages: Sequence[str] | None = None,
    excludes: Sequence[str] | None = None,
) -> list[PkgInfo]:
    """Drop excluded packages, or keep only the exclusive ones when given."""
    if exclusive_packages and excludes:
        raise ValueError("exclusive_packages and excludes can not both be non empty")
    excluded = set(excludes or ())
    return [
        pkg
        for pkg in pkgs
        if pkg.name not in excluded
        and (exclusive_packages is None or pkg.name in exclusive_packages)
    ]


def run_filter(
    patches: Iterable[ZypperPatch],
    exclusive_patches: Sequence[str] | None,
    excludes: Sequence[str] | None,
    pkg_updates: Iterable[PkgInfo] | None,
    pkg_to_patches_map: Mapping[str, Sequence[str]] | None,
    with_update: bool,
) -> tuple[list[ZypperPatch], list[PkgInfo]]:
    """Select the zypper patches and standalone package updates to install."""
    if exclusive_patches:
        wanted = set(exclusive_patches)
        return [p for p in patches if p.name in wanted], []

    packages: list[PkgInfo] = []
    if with_update:
        in_patch = pkg_to_patches_map or {}
        packages = [pkg for pkg in pkg_updates or () if pkg.name not in in_patch]

    excluded = set(excludes or ())
    return [p for p in patches if p.name not in excluded], packages