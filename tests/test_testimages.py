import pytest

from osconfig import testimages as ti


def test_el_without_repo_only_posts():
    assert ti.install_osconfig_el6("") == ti.CURL_POST
    assert ti.install_osconfig_el7("") == ti.CURL_POST
    assert ti.install_osconfig_el8("") == ti.CURL_POST


def test_el_stable_uses_default_repo():
    assert ti.install_osconfig_el6("stable") == ti.YUM_INSTALL_AGENT
    assert ti.install_osconfig_el7("stable") == ti.YUM_INSTALL_AGENT
    assert ti.install_osconfig_el8("stable") == ti.YUM_INSTALL_AGENT


def _check_el_repo_script(script, dist, repo, gpg):
    assert script.endswith(ti.YUM_INSTALL_AGENT)
    assert f"google-osconfig-agent-{dist}-{repo}\n" in script
    assert f"gpgcheck={gpg}\n" in script
    assert f"gpgcheck={1 - gpg}\n" not in script
    assert "/etc/yum.repos.d/google-osconfig-agent.repo" in script


@pytest.mark.parametrize("repo, gpg", [("staging", 1), ("unstable", 0)])
def test_el6_repo_setup(repo, gpg):
    _check_el_repo_script(ti.install_osconfig_el6(repo), "el6", repo, gpg)


@pytest.mark.parametrize("repo, gpg", [("staging", 1), ("unstable", 0)])
def test_el7_repo_setup(repo, gpg):
    _check_el_repo_script(ti.install_osconfig_el7(repo), "el7", repo, gpg)


@pytest.mark.parametrize("repo, gpg", [("staging", 1), ("unstable", 0)])
def test_el8_repo_setup(repo, gpg):
    _check_el_repo_script(ti.install_osconfig_el8(repo), "el8", repo, gpg)


def test_el_repo_file_starts_with_heredoc():
    script = ti.install_osconfig_el7("unstable")
    assert script.startswith("\ncat > /etc/yum.repos.d/google-osconfig-agent.repo <<EOM\n")
    assert "\nEOM\n" in script


def test_suse_without_repo_is_empty():
    assert ti.install_osconfig_suse("") == ""


@pytest.mark.parametrize("repo, gpg", [("staging", 1), ("stable", 1), ("unstable", 0)])
def test_suse_repo_setup(repo, gpg):
    script = ti.install_osconfig_suse(repo)
    assert script.endswith(ti.ZYPPER_INSTALL_AGENT)
    assert f"gpgcheck={gpg}\n" in script
    assert f"google-osconfig-agent-el8-{repo}\n" in script
    assert "/etc/zypp/repos.d/google-osconfig-agent.repo" in script


def test_deb_without_repo_only_posts():
    assert ti.install_osconfig_deb("") == ti.CURL_POST


def test_deb_with_repo():
    script = ti.install_osconfig_deb("unstable")
    assert script.endswith(ti.CURL_POST)
    assert "google-osconfig-agent-unstable main' >> /etc/apt/sources.list" in script
    assert "apt-get install -y google-osconfig-agent" in script


def test_deb_post_marks_install_done():
    assert "osconfig_tests/install_done" in ti.install_osconfig_deb("")


def test_googet_without_repo_only_posts():
    assert ti.install_osconfig_googet("") == ti.WINDOWS_POST


def test_googet_post_marks_install_done():
    assert "osconfig_tests/install_done" in ti.install_osconfig_googet("")


def test_googet_stable_has_no_sources():
    script = ti.install_osconfig_googet("stable")
    assert script.endswith(ti.WINDOWS_POST)
    assert "-sources" not in script
    assert "-noconfirm install google-osconfig-agent" in script


def test_googet_other_repo_uses_sources():
    script = ti.install_osconfig_googet("unstable")
    assert script.endswith(ti.WINDOWS_POST)
    assert "/yuck/repos/google-osconfig-agent-unstable google-osconfig-agent\n" in script


@pytest.mark.parametrize("n", [0, 1, 5, 64])
def test_rand_string_length_and_alphabet(n):
    s = ti.rand_string(n)
    assert len(s) == n
    assert set(s) <= set(ti.RAND_LETTERS)


def test_rand_string_negative_raises():
    with pytest.raises(ValueError):
        ti.rand_string(-1)