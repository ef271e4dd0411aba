import argparse
import json
import sys

from typing import Dict, Hashable, List, Optional, Tuple

from loguru import logger

from errors import HuffmanError
from session import EncodedMessage, HuffmanSession


def get_parser():
    """Create and configure the CLI argument parser.

    :returns: Configured argument parser.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Static Huffman coder for text"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug details to stderr",
    )
    subparsers = parser.add_subparsers(
        title="subcommands", dest="cmd", required=True
    )

    enc = subparsers.add_parser(
        "encode", aliases=["e"], help="Build a code for TEXT and encode it"
    )
    enc.add_argument("text", help="Text to encode")
    enc.add_argument(
        "--hex",
        action="store_true",
        help="Also print the packed bit stream as hex",
    )

    dec = subparsers.add_parser(
        "decode", aliases=["d"], help="Decode a bit string printed by encode"
    )
    dec.add_argument("bits", help="Encoded string of 0/1 digits")
    dec.add_argument(
        "-t", "--tree", required=True, help="Tree metadata (JSON) from encode"
    )
    dec.add_argument(
        "-n",
        "--count",
        required=True,
        type=int,
        help="Number of symbols in the original text",
    )

    rt = subparsers.add_parser(
        "roundtrip", aliases=["r"], help="Encode TEXT and decode it back"
    )
    rt.add_argument("text", help="Text to encode and decode")

    return parser


def _configure_logging(verbose: bool) -> None:
    """Send loguru output to stderr at the requested level.

    :param verbose: Log at DEBUG instead of WARNING.
    :type verbose: bool
    :returns: None
    :rtype: None
    """
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def _sorted_codes(codes: Dict[Hashable, str]) -> List[Tuple[Hashable, str]]:
    """Order a code table by code length, then by code.

    :param codes: Mapping from symbol to code.
    :type codes: Dict[Hashable, str]
    :returns: ``(symbol, code)`` pairs.
    :rtype: List[Tuple[Hashable, str]]
    """
    return sorted(codes.items(), key=lambda item: (len(item[1]), item[1]))


def _fmt_symbol(symbol) -> str:
    """Render a symbol so that whitespace stays visible.

    :param symbol: Symbol to render.
    :returns: Printable form.
    :rtype: str
    """
    if (
        isinstance(symbol, str)
        and len(symbol) == 1
        and symbol.isprintable()
        and not symbol.isspace()
    ):
        return symbol
    return repr(symbol)


def _print_codes(codes: Dict[Hashable, str]) -> None:
    print("Huffman codes:")
    for symbol, code in _sorted_codes(codes):
        print(f"  {_fmt_symbol(symbol)}  {code}")


def _parse_tree(raw: str) -> List[Tuple[Hashable, int, int]]:
    """Parse tree metadata given on the command line.

    :param raw: JSON list of ``[symbol, depth, weight]`` entries.
    :type raw: str
    :returns: Parsed entries.
    :rtype: List[Tuple[Hashable, int, int]]
    :raises ValueError: If ``raw`` is not such a list, or an entry does not
        hold a string symbol, a non-negative depth and a positive weight.
    """
    try:
        entries = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Tree metadata is not valid JSON: {e}") from None
    if not isinstance(entries, list) or not all(
        isinstance(entry, list) and len(entry) == 3 for entry in entries
    ):
        raise ValueError("Tree metadata must be a list of [symbol, depth, weight]")
    for symbol, depth, weight in entries:
        if not isinstance(symbol, str):
            raise ValueError(f"Tree metadata symbol {symbol!r} is not a string")
        if not _is_int(depth) or depth < 0:
            raise ValueError(f"Tree metadata depth {depth!r} is not a valid depth")
        if not _is_int(weight) or weight <= 0:
            raise ValueError(f"Tree metadata weight {weight!r} is not positive")
    return [tuple(entry) for entry in entries]


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def encode_text(text: str, show_hex: bool) -> EncodedMessage:
    """Encode ``text`` and print the code table, the stream and its metadata.

    :param text: Text to encode.
    :type text: str
    :param show_hex: Also print the packed stream in hex.
    :type show_hex: bool
    :returns: The encoded message.
    :rtype: EncodedMessage
    """
    session = HuffmanSession()
    message = session.compress(text)
    _print_codes(session.codes)
    print("Encoded:", message.bits)
    print("Tree:", json.dumps([list(entry) for entry in message.tree]))
    print("Count:", message.symbol_count)
    if show_hex:
        print("Packed:", message.packed().hex())
    return message


def decode_bits(bits: str, tree: str, count: int) -> str:
    """Decode ``bits`` with the tree metadata printed by :func:`encode_text`.

    :param bits: Encoded string of ``0``/``1`` digits.
    :type bits: str
    :param tree: Tree metadata as JSON.
    :type tree: str
    :param count: Number of symbols to decode.
    :type count: int
    :returns: Decoded text.
    :rtype: str
    """
    message = EncodedMessage(
        tree=tuple(_parse_tree(tree)), symbol_count=count, bits=bits, text=True
    )
    decoded = HuffmanSession.decompress(message)
    print("Decoded:", decoded)
    return decoded


def roundtrip_text(text: str) -> str:
    """Encode ``text``, decode it back and print every stage.

    :param text: Text to encode.
    :type text: str
    :returns: Decoded text.
    :rtype: str
    """
    session = HuffmanSession()
    message = session.compress(text)
    _print_codes(session.codes)
    print("Encoded:", message.bits)
    decoded = session.decompress(message)
    print("Decoded:", decoded)
    print(
        f"Size: {message.symbol_count * session.BITS_PER_SYMBOL} bits -> "
        f"{message.bit_length} bits"
    )
    print(f"Compression ratio: {session.ratio(message):.2f}")
    return decoded


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI tool.

    :param argv: Arguments to parse instead of ``sys.argv``.
    :type argv: List[str] | None
    :returns: Process exit status.
    :rtype: int
    """
    parser = get_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.cmd in ["encode", "e"]:
            encode_text(args.text, args.hex)
        elif args.cmd in ["decode", "d"]:
            decode_bits(args.bits, args.tree, args.count)
        elif args.cmd in ["roundtrip", "r"]:
            roundtrip_text(args.text)
    except (HuffmanError, ValueError) as e:
        print(f"[!] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
