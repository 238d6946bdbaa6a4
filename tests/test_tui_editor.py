from sshdeck.host_entry import HostEntry
from sshdeck.tui.editor import HostEditSession


class ScriptedInput:
    """Helper to feed deterministic answers into HostEditSession."""

    def __init__(self, responses):
        self._responses = list(responses)

    def __call__(self, prompt: str) -> str:
        if not self._responses:
            raise AssertionError(f"No scripted response left for prompt: {prompt}")
        return self._responses.pop(0)


def _quiet(*args, **kwargs):
    return None


def _make_entry(**overrides):
    defaults = {
        "name": "web",
        "hostname": "web.internal.example.com",
        "user": "deploy",
        "port": "22",
        "identity_file": "",
        "proxy_jump": "",
        "tags": ["prod"],
    }
    defaults.update(overrides)
    return HostEntry(**defaults)


def test_editor_keeps_values_when_enter_is_pressed():
    entry = _make_entry()
    scripted = ScriptedInput(["", "", "", "", "", "", ""])
    result = HostEditSession(entry, input_func=scripted, print_func=_quiet).run()

    assert result == entry


def test_editor_changes_and_clears_fields():
    entry = _make_entry(proxy_jump="ops@bastion")
    scripted = ScriptedInput(
        [
            "web2",  # name
            "",  # hostname
            "-",  # user -> clear
            "2200",  # port
            "",  # identity
            "-",  # proxy jump -> clear
            "prod, eu",  # tags
        ]
    )
    result = HostEditSession(entry, input_func=scripted, print_func=_quiet).run()

    assert result.name == "web2"
    assert result.user == ""
    assert result.port == "2200"
    assert result.proxy_jump == ""
    assert result.tags == ["prod", "eu"]


def test_editor_reprompts_on_invalid_values():
    printed = []
    scripted = ScriptedInput(
        [
            "web",  # duplicate name -> rejected
            "api",  # name
            "bad..host",  # rejected
            "10.0.0.9",  # hostname
            "",  # user
            "99999",  # rejected port
            "",  # port -> keep default 22
            "",  # identity
            "",  # proxy jump
            "",  # tags
        ]
    )
    session = HostEditSession(
        None, existing_names=["web"], input_func=scripted, print_func=printed.append
    )

    result = session.run()

    assert result == HostEntry(name="api", hostname="10.0.0.9")
    assert "Host name already exists" in printed
    assert "Port must be between 1-65535" in printed


def test_editor_cancel_returns_none():
    def _interrupt(prompt):
        raise KeyboardInterrupt

    assert HostEditSession(_make_entry(), input_func=_interrupt, print_func=_quiet).run() is None
