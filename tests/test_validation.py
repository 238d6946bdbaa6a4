import pytest

from sshdeck.errors import ValidationError
from sshdeck.host_entry import HostEntry
from sshdeck.validation import HostEntryValidator, validate_entry


@pytest.fixture
def validator():
    return HostEntryValidator(existing_names=["web", "db"])


def test_name_rules(validator):
    assert validator.validate_name("app").is_valid
    assert not validator.validate_name("").is_valid
    assert not validator.validate_name("two words").is_valid
    assert not validator.validate_name("web-*").is_valid
    assert not validator.validate_name("web").is_valid
    assert validator.validate_name("web", current_name="web").is_valid


@pytest.mark.parametrize("hostname", ["example.com", "10.0.0.1", "::1", "[fe80::1]", "localhost"])
def test_valid_hostnames(validator, hostname):
    assert validator.validate_hostname(hostname).is_valid


@pytest.mark.parametrize("hostname", ["", "bad..name", "-lead.example.com", "999.1.1.1", "under_score.com"])
def test_invalid_hostnames(validator, hostname):
    assert not validator.validate_hostname(hostname).is_valid


def test_short_hostname_is_a_warning(validator):
    result = validator.validate_hostname("buildbox")
    assert result.is_valid
    assert result.severity == "warning"


def test_port_rules(validator):
    assert validator.validate_port("").is_valid
    assert validator.validate_port("2222").is_valid
    assert not validator.validate_port("0").is_valid
    assert not validator.validate_port("70000").is_valid
    assert not validator.validate_port("ssh").is_valid
    assert validator.validate_port("80").severity == "warning"


def test_proxy_jump_rules(validator):
    assert validator.validate_proxy_jump("").is_valid
    assert validator.validate_proxy_jump("bastion").is_valid
    assert validator.validate_proxy_jump("ops@bastion:2200").is_valid
    assert validator.validate_proxy_jump("a@one,two:22").is_valid
    assert validator.validate_proxy_jump("ops@[fe80::1]:22").is_valid
    assert not validator.validate_proxy_jump("ops@bastion:99999").is_valid
    assert not validator.validate_proxy_jump("ops@:22").is_valid
    assert not validator.validate_proxy_jump("a,,b").is_valid


def test_identity_file_checks(validator, tmp_path):
    key = tmp_path / "id_test"
    key.write_text("key")
    assert validator.validate_identity_file(str(key)).severity != "warning"
    assert validator.validate_identity_file(str(tmp_path / "missing")).severity == "warning"
    assert not validator.validate_identity_file(str(tmp_path)).is_valid


def test_tag_rules(validator):
    assert validator.validate_tags(["prod", "eu-west"]).is_valid
    assert not validator.validate_tags(["two words"]).is_valid


def test_validate_entry_raises_with_all_errors():
    entry = HostEntry(name="bad name", hostname="", port="abc")
    with pytest.raises(ValidationError) as excinfo:
        validate_entry(entry)
    fields = {r.field for r in excinfo.value.results}
    assert fields == {"name", "hostname", "port"}


def test_validate_entry_returns_warnings():
    warnings = validate_entry(HostEntry(name="box", hostname="buildbox"), existing_names=["other"])
    assert [w.field for w in warnings] == ["hostname"]
