from sshdeck.host_block import (
    HostSpan,
    join_lines,
    locate_host_block,
    remove_host_block,
    render_append_text,
    render_host_block,
    replace_host_block,
    split_lines,
)
from sshdeck.host_entry import HostEntry


LINES = [
    "Host a",
    "    HostName 1.1.1.1",
    "",
    "# Tags: web",
    "Host b",
    "    HostName 2.2.2.2",
    "    User root",
    "",
    "Host c",
    "    HostName 3.3.3.3",
    "",
]


def test_split_and_join_keep_trailing_newline():
    text = "Host a\n    HostName x\n"
    assert split_lines(text) == ["Host a", "    HostName x", ""]
    assert join_lines(split_lines(text)) == text
    assert join_lines(split_lines("Host a\r\n")) == "Host a\n"


def test_locate_bare_host_block():
    assert locate_host_block(LINES, "a") == HostSpan(0, 2, False)
    assert locate_host_block(LINES, "c") == HostSpan(8, 10, False)


def test_locate_includes_tags_line():
    assert locate_host_block(LINES, "b") == HostSpan(3, 7, True)


def test_locate_requires_exact_name():
    assert locate_host_block(LINES, "ab") is None
    assert locate_host_block(["Host abc", "    HostName x"], "ab") is None


def test_block_ends_at_next_host_without_blank_separator():
    lines = ["Host a", "    HostName x", "Host b", "    HostName y"]
    assert locate_host_block(lines, "a") == HostSpan(0, 2, False)
    assert locate_host_block(lines, "b") == HostSpan(2, 4, False)


def test_block_stops_before_tags_of_next_host():
    lines = ["Host a", "    HostName x", "# Tags: t", "Host b"]
    assert locate_host_block(lines, "a") == HostSpan(0, 2, False)
    assert locate_host_block(lines, "b") == HostSpan(2, 4, True)


def test_block_stops_at_match_block():
    lines = ["Host a", "    HostName x", "Match host foo", "    User bar"]
    assert locate_host_block(lines, "a") == HostSpan(0, 2, False)


def test_render_omits_default_port_and_empty_fields():
    entry = HostEntry(name="b", hostname="5.6.7.8", port="22")
    assert render_host_block(entry) == ["Host b", "    HostName 5.6.7.8"]


def test_render_full_entry():
    entry = HostEntry(
        name="full",
        hostname="h.example.com",
        user="me",
        port="2200",
        identity_file="~/.ssh/id",
        proxy_jump="jump@bastion:22",
        tags=["x", "y"],
    )
    assert render_host_block(entry) == [
        "# Tags: x, y",
        "Host full",
        "    HostName h.example.com",
        "    User me",
        "    Port 2200",
        "    IdentityFile ~/.ssh/id",
        "    ProxyJump jump@bastion:22",
    ]


def test_append_text_adds_blank_separator():
    entry = HostEntry(name="n", hostname="h")
    assert render_append_text("Host a\n", entry) == "\nHost n\n    HostName h\n"
    assert render_append_text("Host a", entry) == "\n\nHost n\n    HostName h\n"
    assert render_append_text("", entry) == "Host n\n    HostName h\n"


def test_replace_keeps_surrounding_lines_verbatim():
    span = locate_host_block(LINES, "b")
    entry = HostEntry(name="b2", hostname="9.9.9.9", proxy_jump="j")
    result = replace_host_block(LINES, span, entry)
    assert result == [
        "Host a",
        "    HostName 1.1.1.1",
        "",
        "Host b2",
        "    HostName 9.9.9.9",
        "    ProxyJump j",
        "",
        "Host c",
        "    HostName 3.3.3.3",
        "",
    ]


def test_replace_adds_separator_when_previous_line_is_not_blank():
    lines = ["Host a", "    HostName x", "Host b", "    HostName y", ""]
    result = replace_host_block(lines, locate_host_block(lines, "b"), HostEntry(name="b", hostname="z"))
    assert result == ["Host a", "    HostName x", "", "Host b", "    HostName z", ""]


def test_remove_consumes_one_trailing_blank_line():
    result = remove_host_block(LINES, locate_host_block(LINES, "b"))
    assert result == [
        "Host a",
        "    HostName 1.1.1.1",
        "",
        "Host c",
        "    HostName 3.3.3.3",
        "",
    ]


def test_remove_last_block_keeps_final_newline():
    result = remove_host_block(LINES, locate_host_block(LINES, "c"))
    assert join_lines(result) == "Host a\n    HostName 1.1.1.1\n\n# Tags: web\nHost b\n    HostName 2.2.2.2\n    User root\n"


def test_remove_only_one_blank_line():
    lines = ["Host a", "    HostName x", "", "", "Host b"]
    assert remove_host_block(lines, locate_host_block(lines, "a")) == ["", "Host b"]


def test_remove_last_block_without_separator_keeps_final_newline():
    lines = split_lines("Host a\n    HostName 1\nHost b\n    HostName 2\n")
    result = remove_host_block(lines, locate_host_block(lines, "b"))
    assert join_lines(result) == "Host a\n    HostName 1\n"


def test_replace_first_block_gets_no_leading_blank_line():
    lines = ["Host a", "    HostName x", "", "Host b", "    HostName y", ""]
    result = replace_host_block(lines, locate_host_block(lines, "a"), HostEntry(name="a", hostname="z"))
    assert result == ["Host a", "    HostName z", "", "Host b", "    HostName y", ""]


def test_replace_after_blank_line_does_not_add_another():
    span = locate_host_block(LINES, "c")
    result = replace_host_block(LINES, span, HostEntry(name="c", hostname="4.4.4.4"))
    assert result[6:] == ["    User root", "", "Host c", "    HostName 4.4.4.4", ""]
