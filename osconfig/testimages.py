"""Startup scripts and image catalogues used when testing the agent on VMs."""

from __future__ import annotations

import random

_METADATA_HOST = "metadata.google.internal"
_PACKAGES_HOST = "packages.cloud.google.com"
_GUEST_ATTRIBUTES = f"http://{_METADATA_HOST}/computeMetadata/v1/instance/guest-attributes"
_AGENT = "google-osconfig-agent"
_GOOGET = r"c:\programdata\googet\googet.exe"

RAND_LETTERS = "bdghjlmnpqrstvwxyz0123456789"


def _script(*lines: str) -> str:
    """Join script lines, each preceded by a newline."""
    return "".join("\n" + line for line in lines)


def _retry_loop(install: str, limit: int, on_limit: tuple[str, ...]) -> tuple[str, ...]:
    return (
        f"while ! {install}; do",
        f"if [[ n -gt {limit} ]]; then",
        *on_limit,
        "fi",
        "n=$[$n+1]",
        "sleep 5",
        "done",
    )


# Marks the agent as installed: clears the inventory timestamp and sets
# install_done in guest attributes.
CURL_POST = _script(
    f"uri={_GUEST_ATTRIBUTES}/guestInventory/LastUpdated",
    'curl -X DELETE $uri -H "Metadata-Flavor: Google"',
    "",
    f"uri={_GUEST_ATTRIBUTES}/osconfig_tests/install_done",
    'curl -X PUT --data "1" $uri -H "Metadata-Flavor: Google"',
    "",
)

_PS_HEADERS = '-Headers @{"Metadata-Flavor" = "Google"}'

WINDOWS_POST = _script(
    f"$uri = '{_GUEST_ATTRIBUTES}/guestInventory/LastUpdated'",
    f"Invoke-RestMethod -Method DELETE -Uri $uri {_PS_HEADERS}",
    "Start-Sleep 10",
    f"$uri = '{_GUEST_ATTRIBUTES}/osconfig_tests/install_done'",
    f"Invoke-RestMethod -Method PUT -Uri $uri {_PS_HEADERS} -Body 1",
    "",
)

_EL6_NOTE = "  # required for EL6"

YUM_INSTALL_AGENT = _script(
    "sed -i 's/repo_gpgcheck=1/repo_gpgcheck=0/g' /etc/yum.repos.d/google-cloud.repo",
    "sleep 10",
    f"systemctl stop {_AGENT}",
    f"stop -q -n {_AGENT}{_EL6_NOTE}",
    *_retry_loop(f"yum install -y {_AGENT}", 3, ("  exit 1",)),
    f"systemctl start {_AGENT}",
    f"start -q -n {_AGENT}{_EL6_NOTE}",
) + CURL_POST

_ZYPPER_INSTALL = f"zypper -n -i --no-gpg-checks install {_AGENT}"

ZYPPER_INSTALL_AGENT = _script(
    "sleep 10",
    f"systemctl stop {_AGENT}",
    f"zypper -n remove {_AGENT}",
    *_retry_loop(
        _ZYPPER_INSTALL,
        2,
        (
            "  # Zypper repos are flaky, we retry 3 times then just continue, "
            "the agent may be installed fine.",
            f"  zypper --no-refresh -n -i --no-gpg-checks install {_AGENT}",
            "  break",
        ),
    ),
    f"systemctl start {_AGENT}",
) + CURL_POST

_JOURNALD_CONF = "/etc/systemd/journald.conf"

# Sets up serial logging on COS.
COS_SETUP = _script(
    "sleep 10",
    f"sed -i 's/^#ForwardToConsole=no/ForwardToConsole=yes/' {_JOURNALD_CONF}",
    f"sed -i 's/^#MaxLevelConsole=info/MaxLevelConsole=debug/' {_JOURNALD_CONF}",
    "MaxLevelConsole=debug",
    "systemctl force-reload systemd-journald",
    f"systemctl restart {_AGENT}",
) + CURL_POST


def _repo_setup(repo_file: str, dist: str, agent_repo: str, gpgcheck: int) -> str:
    yum_base = f"https://{_PACKAGES_HOST}/yum"
    return _script(
        f"cat > {repo_file} <<EOM",
        f"[{_AGENT}]",
        "name=Google OSConfig Agent Repository",
        f"baseurl={yum_base}/repos/{_AGENT}-{dist}-{agent_repo}",
        "enabled=1",
        f"gpgcheck={gpgcheck}",
        f"gpgkey={yum_base}/doc/yum-key.gpg",
        f"\t   {yum_base}/doc/rpm-package-key.gpg",
        "EOM",
    )


def install_osconfig_deb(agent_repo: str) -> str:
    """Startup script installing the agent on deb based systems."""
    if not agent_repo:
        return CURL_POST
    apt_base = f"http://{_PACKAGES_HOST}/apt"
    return _script(
        "sleep 10",
        f"systemctl stop {_AGENT}",
        f"echo 'deb {apt_base} {_AGENT}-{agent_repo} main' >> /etc/apt/sources.list",
        f"curl https://{_PACKAGES_HOST}/apt/doc/apt-key.gpg | apt-key add -",
        "apt-get update",
        f"apt-get install -y {_AGENT}",
        f"systemctl start {_AGENT}",
    ) + CURL_POST


def install_osconfig_googet(agent_repo: str) -> str:
    """Startup script installing the agent on Windows systems."""
    if not agent_repo:
        return WINDOWS_POST
    remove = f"{_GOOGET} -noconfirm remove {_AGENT}"
    if agent_repo == "stable":
        return _script(remove, f"{_GOOGET} -noconfirm install {_AGENT}") + WINDOWS_POST
    sources = f"https://{_PACKAGES_HOST}/yuck/repos/{_AGENT}-{agent_repo}"
    return _script(
        remove,
        f"{_GOOGET} -noconfirm install -sources {sources} {_AGENT}",
        "",
    ) + WINDOWS_POST


def install_osconfig_suse(agent_repo: str) -> str:
    """Startup script installing the agent on SUSE systems."""
    if not agent_repo:
        return ""
    gpgcheck = 1 if agent_repo in ("staging", "stable") else 0
    return (
        _repo_setup(f"/etc/zypp/repos.d/{_AGENT}.repo", "el8", agent_repo, gpgcheck)
        + ZYPPER_INSTALL_AGENT
    )


def _install_osconfig_el(dist: str, agent_repo: str) -> str:
    if not agent_repo:
        return CURL_POST
    if agent_repo == "stable":
        return YUM_INSTALL_AGENT
    gpgcheck = 1 if agent_repo == "staging" else 0
    return (
        _repo_setup(f"/etc/yum.repos.d/{_AGENT}.repo", dist, agent_repo, gpgcheck)
        + YUM_INSTALL_AGENT
    )


def install_osconfig_el8(agent_repo: str) -> str:
    """Startup script installing the agent on EL8 systems."""
    return _install_osconfig_el("el8", agent_repo)


def install_osconfig_el7(agent_repo: str) -> str:
    """Startup script installing the agent on EL7 systems."""
    return _install_osconfig_el("el7", agent_repo)


def install_osconfig_el6(agent_repo: str) -> str:
    """Startup script installing the agent on EL6 systems."""
    return _install_osconfig_el("el6", agent_repo)


def rand_string(n: int) -> str:
    """Return a random string of length n drawn from RAND_LETTERS."""
    if n < 0:
        raise ValueError(f"length must not be negative: {n}")
    gen = random.Random()
    return "".join(gen.choice(RAND_LETTERS) for _ in range(n))


def _families(project: str, *families: str) -> dict[str, str]:
    return {
        f"{project}/{family}": f"projects/{project}/global/images/family/{family}"
        for family in families
    }


def _old(*entries: tuple[str, str, str]) -> dict[str, str]:
    return {
        f"old/{name}": f"projects/{project}/global/images/{image}"
        for name, project, image in entries
    }


_UBUNTU_LTS = ("ubuntu-1604-lts", "ubuntu-1804-lts", "ubuntu-2004-lts")

HEAD_APT_IMAGES = {
    **_families("debian-cloud", "debian-9", "debian-10"),
    **_families("ubuntu-os-cloud", *_UBUNTU_LTS),
    **_families("ubuntu-os-cloud-image-proposed", *_UBUNTU_LTS),
}

OLD_APT_IMAGES = _old(
    ("debian-9", "debian-cloud", "debian-9-stretch-v20191014"),
    ("debian-10", "debian-cloud", "debian-10-buster-v20191014"),
    ("ubuntu-1604-lts", "ubuntu-os-cloud", "ubuntu-1604-xenial-v20191005"),
    ("ubuntu-1804-lts", "ubuntu-os-cloud", "ubuntu-1804-bionic-v20191002"),
    ("ubuntu-2004-lts", "ubuntu-os-cloud", "ubuntu-2004-focal-v20200506"),
)

HEAD_SUSE_IMAGES = {
    **_families("suse-cloud", "sles-12", "sles-15"),
    **_families("opensuse-cloud", "opensuse-leap"),
}

OLD_SUSE_IMAGES = _old(
    ("sles-12", "compute-image-tools-test", "sles-12-sp5-v20191209"),
    ("sles-15", "compute-image-tools-test", "sles-15-sp1-v20190625"),
    ("opensuse-leap", "opensuse-cloud", "opensuse-leap-15-1-v20190618"),
)

# EL6 is end of life, so the last published image is used.
HEAD_EL6_IMAGES = {
    "rhel-cloud/rhel-6": "projects/rhel-cloud/global/images/rhel-6-v20201112",
}

OLD_EL6_IMAGES = _old(("rhel-6", "rhel-cloud", "rhel-6-v20191014"))

HEAD_EL7_IMAGES = {
    **_families("centos-cloud", "centos-7"),
    **_families("rhel-cloud", "rhel-7"),
}

OLD_EL7_IMAGES = _old(
    ("centos-7", "centos-cloud", "centos-7-v20191014"),
    ("rhel-7", "rhel-cloud", "rhel-7-v20191014"),
)

HEAD_EL8_IMAGES = {
    **_families("centos-cloud", "centos-8"),
    **_families("rhel-cloud", "rhel-8"),
}

OLD_EL8_IMAGES = _old(
    ("centos-8", "centos-cloud", "centos-7-v20191014"),
    ("rhel-8", "rhel-cloud", "rhel-7-v20191014"),
)

HEAD_EL_IMAGES = {**HEAD_EL7_IMAGES, **HEAD_EL8_IMAGES}

HEAD_WINDOWS_IMAGES = _families(
    "windows-cloud",
    "windows-2012-r2",
    "windows-2012-r2-core",
    "windows-2016",
    "windows-2016-core",
    "windows-2019",
    "windows-2019-core",
    "windows-2004-core",
    "windows-20h2-core",
)

OLD_WINDOWS_IMAGES = _old(
    *(
        (
            f"windows-{release}{variant}",
            "windows-cloud",
            f"windows-server-{release}-dc{variant}-v20210309",
        )
        for release in ("2012-r2", "2016", "2019")
        for variant in ("", "-core")
    )
)

HEAD_COS_IMAGES = _families("cos-cloud", "cos-stable", "cos-beta", "cos-dev")