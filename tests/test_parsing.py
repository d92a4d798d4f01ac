from duet.parsing import ActionDirective, NoAction, parse_action


def test_parse_action_returns_no_action_for_plain_text() -> None:
    assert parse_action("Thought: nothing to do.\nResponse: hello") == NoAction()


def test_parse_action_takes_first_directive_only() -> None:
    text = "Thought: search twice\nAction: web_search: foo\nAction: other: bar\ntrailing notes"

    directive = parse_action(text)

    assert directive == ActionDirective(name="web_search", input="foo", line=1)


def test_parse_action_keeps_colons_and_trailing_text_in_input() -> None:
    directive = parse_action("Action: web_search: python 3.13: release notes  ")

    assert isinstance(directive, ActionDirective)
    assert directive.name == "web_search"
    assert directive.input == "python 3.13: release notes  "


def test_parse_action_requires_directive_at_line_start() -> None:
    assert parse_action("I will now do Action: web_search: foo") == NoAction()
    assert parse_action("  Action: web_search: foo") == NoAction()


def test_parse_action_rejects_names_with_spaces() -> None:
    assert parse_action("Action: search the web: foo") == NoAction()


def test_parse_action_accepts_empty_input_and_crlf_lines() -> None:
    directive = parse_action("Thought: x\r\nAction: ping: \r\n")

    assert directive == ActionDirective(name="ping", input="", line=1)


def test_parse_action_splits_on_newline_only() -> None:
    directive = parse_action("Thought: x\nAction: web_search: gold\x0cprice\x1c2024 q3\x85end\nnext")

    assert directive == ActionDirective(name="web_search", input="gold\x0cprice\x1c2024 q3\x85end", line=1)


def test_parse_action_drops_only_one_carriage_return() -> None:
    directive = parse_action("Action: web_search: foo\r\r\n")

    assert isinstance(directive, ActionDirective)
    assert directive.input == "foo\r"
