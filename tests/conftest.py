import os
import sys

import pytest

# Ensure project root is on sys.path
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Keep settings and the default SSH directory inside the test's tmp_path."""
    monkeypatch.setenv("SSHDECK_CONFIG_DIR", str(tmp_path / "app-config"))
    monkeypatch.setenv("SSHDECK_SSH_DIR", str(tmp_path / "dot-ssh"))


SAMPLE_CONFIG = "\n".join(
    [
        "# Global defaults",
        "Host *",
        "    ServerAliveInterval 60",
        "",
        "# Tags: prod, web",
        "Host alpha",
        "    HostName alpha.example.com",
        "    User deploy",
        "",
        "Host beta",
        "    HostName 10.0.0.2",
        "    Port 2222",
        "    IdentityFile ~/.ssh/id_beta",
        "    ForwardAgent yes",
        "",
        "# Tags: db",
        "Host gamma",
        "    HostName gamma.example.com",
        "    ProxyJump admin@bastion:2200",
        "",
    ]
)


@pytest.fixture
def sample_config(tmp_path):
    path = tmp_path / "config"
    path.write_text(SAMPLE_CONFIG)
    return path
