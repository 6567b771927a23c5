# osconfig

Helpers for managing the operating system of Linux hosts:

- `osconfig.osinfo` detects the distribution, version, kernel and
  architecture.
- `osconfig.patching` filters package and patch lists and works out
  whether a reboot is needed after updates.
- `osconfig.testimages` builds agent install scripts and holds the image
  tables used when testing against cloud images.

The package has no third-party dependencies.

## Installation

```
pip install .
```

## Usage

### System information

```python
from osconfig import osinfo

info = osinfo.get()
print(info.short_name, info.version, info.architecture)

osinfo.parse_os_release('ID=debian\nVERSION_ID="10"\nPRETTY_NAME="Debian buster"\n')
osinfo.parse_enterprise_release("CentOS Linux release 7.6.1810 (Core)")
osinfo.architecture("amd64")  # "x86_64"
```

`get()` returns an `OSInfo` dataclass. It reads `/etc/os-release`,
falling back to `/etc/oracle-release` and then `/etc/redhat-release`; if
none can be read the short name is `"linux"`. The host name, machine
architecture, kernel version and kernel release come from `os.uname()`.

`architecture()` maps `amd64` and `64-bit` to `x86_64`, `i386`, `i686`
and `32-bit` to `x86_32`, and `noarch` to `all`; other values are
returned unchanged.

### Filtering updates

```python
from osconfig.patching import PkgInfo, ZypperPatch, filter_packages, run_filter

pkgs = [PkgInfo(name="foo", arch="noarch", version="2.0.0-1")]
filter_packages(pkgs, exclusive_packages=None, excludes=["bar"])
```

`filter_packages` drops packages named in `excludes`, or, when
`exclusive_packages` is given, keeps only those. Passing both non-empty
raises `ValueError`.

`run_filter(patches, exclusive_patches, excludes, pkg_updates,
pkg_to_patches_map, with_update)` returns a tuple of the `ZypperPatch`
objects and the `PkgInfo` updates to install. With exclusive patches
only those patches are returned and no packages; otherwise excluded
patches are dropped, and when `with_update` is true the package updates
that do not belong to any patch are returned as well.

### Reboot checks

```python
from osconfig.patching import get_btime, rpm_reboot, rpm_reboot_required

boot_time = get_btime("/proc/stat")
rpm_reboot_required(b"1\n3\n2\n6", 5)  # True
needs_reboot = rpm_reboot()
```

`get_btime` raises `ValueError` when the file has no usable `btime`
line and `OSError` when it cannot be read. `rpm_reboot()` runs
`/usr/bin/rpmquery` for the install times of core packages (kernel,
glibc, openssl, dbus and the like) and reports whether any of them was
installed after the last boot.

### Test images

```python
from osconfig.testimages import HEAD_EL_IMAGES, install_osconfig_el8, rand_string

script = install_osconfig_el8("staging")
name = "test-" + rand_string(5)
```

`install_osconfig_deb`, `install_osconfig_googet`, `install_osconfig_suse`
and `install_osconfig_el6`/`el7`/`el8` take the agent repository name and
return a startup script; an empty name gives only the post-install
marker script (or an empty string for SUSE). The module also holds
dictionaries of image names to image paths, such as `HEAD_APT_IMAGES`,
`OLD_SUSE_IMAGES`, `HEAD_WINDOWS_IMAGES` and `HEAD_COS_IMAGES`.

## What this package does not do

It is a library only: there is no command-line program and no
long-running agent. It does not install, remove or list packages through
apt, yum or zypper itself, does not talk to any configuration service,
and does not create cloud instances. System detection and reboot checks
cover Linux only.

## Running the tests

```
pip install .[test]
pytest
```