import os

import pytest

from osconfig import osinfo


def test_parse_os_release_debian():
    content = """PRETTY_NAME="Debian buster"
NAME="Debian GNU/Linux"
VERSION_ID="10"
VERSION="10 (buster)"
VERSION_CODENAME=buster
ID=debian
HOME_URL="https://www.debian.org/"
SUPPORT_URL="https://www.debian.org/support"
BUG_REPORT_URL="https://bugs.debian.org/"
"""
    info = osinfo.parse_os_release(content)
    assert info.long_name == "Debian buster"
    assert info.short_name == "debian"
    assert info.version == "10"


def test_parse_os_release_empty_defaults_to_linux():
    info = osinfo.parse_os_release("\n")
    assert info.long_name == ""
    assert info.short_name == "linux"


def test_parse_enterprise_release_centos():
    info = osinfo.parse_enterprise_release("CentOS Linux release 7.6.1810 (Core)")
    assert info.long_name == "CentOS Linux 7.6.1810 (Core)"
    assert info.short_name == "centos"
    assert info.version == "7.6.1810"


def test_parse_enterprise_release_redhat():
    info = osinfo.parse_enterprise_release("Red Hat Enterprise Linux release 8.0 (Ootpa)")
    assert info.long_name == "Red Hat Enterprise Linux 8.0 (Ootpa)"
    assert info.short_name == "rhel"
    assert info.version == "8.0"


def test_parse_enterprise_release_oracle():
    info = osinfo.parse_enterprise_release("Oracle Linux Server release 7.9")
    assert info.short_name == "ol"
    assert info.version == "7.9"
    assert info.long_name == "Oracle Linux Server 7.9"


@pytest.mark.parametrize(
    "arch, expected",
    [
        ("amd64", "x86_64"),
        ("64-bit", "x86_64"),
        ("i386", "x86_32"),
        ("i686", "x86_32"),
        ("32-bit", "x86_32"),
        ("noarch", "all"),
        ("aarch64", "aarch64"),
    ],
)
def test_architecture(arch, expected):
    assert osinfo.architecture(arch) == expected


def test_get_reports_uname_fields():
    info = osinfo.get()
    uts = os.uname()
    assert info.hostname == uts.nodename
    assert info.kernel_release == uts.release
    assert info.architecture == osinfo.architecture(uts.machine)
    assert info.short_name != ""