from typing import Dict, Hashable, Iterable, Iterator, List

from loguru import logger

from errors import InvalidStreamError, TruncatedStreamError, UnknownSymbolError
from huffman import HuffmanNode


def encode(data: Iterable[Hashable], codes: Dict[Hashable, str]) -> str:
    """Replace every symbol of ``data`` with its code, in input order.

    :param data: Input symbols.
    :type data: Iterable[Hashable]
    :param codes: Code table from :func:`huffman.assign_codes`.
    :type codes: Dict[Hashable, str]
    :returns: The encoded stream as a string of ``'0'``/``'1'`` characters.
    :rtype: str
    :raises UnknownSymbolError: If a symbol has no entry in ``codes``.
    """
    parts = []
    for position, symbol in enumerate(data):
        try:
            parts.append(codes[symbol])
        except KeyError:
            raise UnknownSymbolError(symbol, position) from None
    return "".join(parts)


def iter_decode(
    root: HuffmanNode, stream: str, symbol_count: int
) -> Iterator[Hashable]:
    """Lazily decode ``symbol_count`` symbols from ``stream``.

    Walks the tree one digit at a time: ``'0'`` descends left, ``'1'``
    right, and reaching a leaf yields its symbol and restarts at the root.
    When the root itself is a leaf every symbol is coded as a single
    ``'0'``, so one digit is consumed per emitted symbol. Digits left over
    once ``symbol_count`` symbols are out are ignored.

    :param root: Root of the tree the stream was encoded with.
    :type root: HuffmanNode
    :param stream: Encoded ``'0'``/``'1'`` digits.
    :type stream: str
    :param symbol_count: Number of symbols in the original input.
    :type symbol_count: int
    :returns: Generator of decoded symbols.
    :rtype: Iterator[Hashable]
    :raises TruncatedStreamError: If ``stream`` ends early.
    :raises InvalidStreamError: If a digit is not a valid branch.
    :raises ValueError: If ``symbol_count`` is negative; raised by the
        call itself, before any symbol is requested.
    """
    if symbol_count < 0:
        raise ValueError(f"Invalid symbol count: {symbol_count}")
    return _walk_stream(root, stream, symbol_count)


def _walk_stream(
    root: HuffmanNode, stream: str, symbol_count: int
) -> Iterator[Hashable]:
    cursor = 0
    emitted = 0
    length = len(stream)

    if root.is_leaf:
        while emitted < symbol_count:
            if cursor >= length:
                raise TruncatedStreamError(emitted, symbol_count)
            if stream[cursor] != "0":
                raise InvalidStreamError(
                    f"Invalid digit {stream[cursor]!r} at bit {cursor} "
                    "for a single-symbol tree"
                )
            cursor += 1
            emitted += 1
            yield root.symbol
        return

    node = root
    while emitted < symbol_count:
        if node.is_leaf:
            symbol = node.symbol
            node = root
            emitted += 1
            yield symbol
            continue
        if cursor >= length:
            raise TruncatedStreamError(emitted, symbol_count)
        bit = stream[cursor]
        if bit == "0":
            node = node.left
        elif bit == "1":
            node = node.right
        else:
            raise InvalidStreamError(f"Invalid digit {bit!r} at bit {cursor}")
        cursor += 1

    if cursor < length:
        logger.debug(f"[Codec] Ignored {length - cursor} trailing bits")


def decode(root: HuffmanNode, stream: str, symbol_count: int) -> List[Hashable]:
    """Decode ``stream`` into a list of ``symbol_count`` symbols.

    See :func:`iter_decode` for the decoding rules and errors.

    :rtype: List[Hashable]
    """
    return list(iter_decode(root, stream, symbol_count))
