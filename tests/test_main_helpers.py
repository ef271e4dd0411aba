import pytest


def test_sorted_codes_orders_by_length_then_code(m):
    codes = {"b": "110", "a": "0", "r": "111", "c": "100"}
    assert m._sorted_codes(codes) == [
        ("a", "0"), ("c", "100"), ("b", "110"), ("r", "111")
    ]


def test_fmt_symbol_keeps_whitespace_visible(m):
    assert m._fmt_symbol("a") == "a"
    assert m._fmt_symbol(" ") == "' '"
    assert m._fmt_symbol("\n") == "'\\n'"
    assert m._fmt_symbol(65) == "65"


def test_parse_tree_accepts_encode_output(m):
    assert m._parse_tree('[["a", 1, 5], ["b", 1, 2]]') == [
        ("a", 1, 5), ("b", 1, 2)
    ]


@pytest.mark.parametrize("raw", [
    "not json",
    '{"a": 1}',
    '[["a", 1]]',
    '[[1, 0, 1]]',
    '[[["x"], 0, 1]]',
    '[["a", 1, "x"], ["b", 1, 1]]',
    '[["a", true, 1]]',
    '[["a", -1, 1]]',
    '[["a", 0, 0]]',
])
def test_parse_tree_rejects_bad_metadata(m, raw):
    with pytest.raises(ValueError):
        m._parse_tree(raw)


def test_cli_parser_accepts_subcommands(m):
    parser = m.get_parser()
    ns = parser.parse_args(["encode", "hello", "--hex"])
    assert ns.cmd in ("encode", "e") and ns.hex
    ns2 = parser.parse_args(["d", "0101", "-t", "[]", "-n", "2"])
    assert ns2.cmd in ("decode", "d") and ns2.count == 2
    ns3 = parser.parse_args(["-v", "roundtrip", "abc"])
    assert ns3.cmd in ("roundtrip", "r") and ns3.verbose


def test_cli_parser_requires_subcommand(m):
    with pytest.raises(SystemExit):
        m.get_parser().parse_args([])
