import json
import pytest


def _field(out, name):
    for line in out.splitlines():
        if line.startswith(name + ":"):
            return line.split(":", 1)[1].strip()
    raise AssertionError(f"{name} not found in output")


def test_encode_then_decode_via_cli(m, capsys, abracadabra):
    assert m.main(["encode", abracadabra, "--hex"]) == 0
    out = capsys.readouterr().out
    assert "Huffman codes:" in out
    assert "  a  0" in out
    bits = _field(out, "Encoded")
    tree = _field(out, "Tree")
    count = _field(out, "Count")
    assert bits == "01101110100010101101110"
    assert json.loads(tree)[0] == ["a", 1, 5]
    assert count == "11"
    assert _field(out, "Packed") == bytes.fromhex(_field(out, "Packed")).hex()

    assert m.main(["decode", bits, "--tree", tree, "--count", count]) == 0
    out = capsys.readouterr().out
    assert _field(out, "Decoded") == abracadabra


def test_roundtrip_via_cli(m, capsys):
    assert m.main(["r", "aaaa"]) == 0
    out = capsys.readouterr().out
    assert _field(out, "Encoded") == "0000"
    assert _field(out, "Decoded") == "aaaa"
    assert "Compression ratio: 8.00" in out


def test_cli_reports_engine_errors(m, capsys):
    assert m.main(["encode", ""]) == 1
    assert capsys.readouterr().out.startswith("[!] ")

    tree = json.dumps([["a", 1, 1], ["b", 1, 1]])
    assert m.main(["decode", "0", "-t", tree, "-n", "3"]) == 1
    assert "Stream exhausted" in capsys.readouterr().out

    assert m.main(["decode", "0", "-t", "oops", "-n", "1"]) == 1
    assert "[!] Tree metadata" in capsys.readouterr().out


@pytest.mark.parametrize("tree", [
    [[1, 0, 1]],
    [["a", 1, "x"], ["b", 1, 1]],
    [["a", 5000, 1]],
    [[["x"], 0, 1]],
])
def test_cli_reports_malformed_tree(m, capsys, tree):
    assert m.main(["decode", "0", "-t", json.dumps(tree), "-n", "1"]) == 1
    assert capsys.readouterr().out.startswith("[!] ")
