from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional, Sequence, Tuple, Union

from loguru import logger

from bitops import pack_bits, unpack_bits
from codec import decode, encode
from huffman import (
    HuffmanNode,
    assign_codes,
    build_tree,
    count_frequencies,
    dump_tree,
    load_tree,
)


@dataclass(frozen=True)
class EncodedMessage:
    """Everything needed to decode a compressed sequence.

    :ivar tree: Pre-order leaf entries from :func:`huffman.dump_tree`.
    :type tree: Tuple[Tuple[Hashable, int, int], ...]
    :ivar symbol_count: Number of symbols in the original input.
    :type symbol_count: int
    :ivar bits: Encoded stream of ``'0'``/``'1'`` characters.
    :type bits: str
    :ivar text: Whether the input was a ``str`` (decoded output is joined).
    :type text: bool
    """

    tree: Tuple[Tuple[Hashable, int, int], ...]
    symbol_count: int
    bits: str
    text: bool = False

    @property
    def bit_length(self) -> int:
        return len(self.bits)

    def packed(self) -> bytes:
        """Return :attr:`bits` packed MSB first into zero padded bytes."""
        return pack_bits(self.bits)

    @classmethod
    def from_packed(
        cls,
        tree: Sequence[Sequence],
        symbol_count: int,
        data: bytes,
        bit_length: int,
        text: bool = False,
    ) -> "EncodedMessage":
        """Build a message from packed bytes and their exact bit length.

        :raises TruncatedStreamError: If ``data`` holds fewer than
            ``bit_length`` bits.
        """
        return cls(
            tree=tuple(tuple(entry) for entry in tree),
            symbol_count=symbol_count,
            bits=unpack_bits(data, bit_length),
            text=text,
        )


class HuffmanSession:
    """One static Huffman encode/decode session.

    Owns the tree and code table built by the last :meth:`compress` call.
    Sessions share nothing, so independent inputs should use independent
    sessions.

    :ivar BITS_PER_SYMBOL: Fixed-width size used to report the compression
        ratio.
    :type BITS_PER_SYMBOL: int
    :ivar root: Tree from the last compression, or ``None``.
    :type root: HuffmanNode | None
    :ivar codes: Code table from the last compression.
    :type codes: Dict[Hashable, str]
    :ivar frequencies: Frequency table from the last compression.
    :type frequencies: Dict[Hashable, int]
    """

    BITS_PER_SYMBOL = 8

    def __init__(self):
        self.root: Optional[HuffmanNode] = None
        self.codes: Dict[Hashable, str] = {}
        self.frequencies: Dict[Hashable, int] = {}

    def compress(self, data: Union[str, Sequence[Hashable]]) -> EncodedMessage:
        """Build a code for ``data`` and encode it.

        :param data: Input sequence; a ``str`` is coded per character.
        :type data: str | Sequence[Hashable]
        :returns: The encoded message with its tree metadata.
        :rtype: EncodedMessage
        :raises EmptyInputError: If ``data`` is empty.
        """
        self.frequencies = count_frequencies(data)
        self.root = build_tree(self.frequencies)
        self.codes = assign_codes(self.root)
        bits = encode(data, self.codes)
        logger.debug(
            f"[Session] Encoded {len(data)} symbols into {len(bits)} bits"
        )
        return EncodedMessage(
            tree=tuple(dump_tree(self.root)),
            symbol_count=len(data),
            bits=bits,
            text=isinstance(data, str),
        )

    @staticmethod
    def decompress(message: EncodedMessage) -> Union[str, List[Hashable]]:
        """Decode a message produced by :meth:`compress`.

        :param message: The encoded message.
        :type message: EncodedMessage
        :returns: The original sequence, as a ``str`` for text input.
        :rtype: str | List[Hashable]
        :raises TruncatedStreamError: If the stream is too short.
        :raises InvalidStreamError: If the stream does not match the tree.
        """
        if message.symbol_count == 0:
            return "" if message.text else []
        root = load_tree(message.tree)
        symbols = decode(root, message.bits, message.symbol_count)
        if message.text:
            return "".join(symbols)
        return symbols

    def ratio(self, message: EncodedMessage) -> float:
        """Fixed-width input size divided by encoded size."""
        if message.bit_length == 0:
            return 0.0
        return message.symbol_count * self.BITS_PER_SYMBOL / message.bit_length
