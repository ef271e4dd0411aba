class HuffmanError(Exception):
    """Base class for all Huffman coding errors."""


class EmptyInputError(HuffmanError, ValueError):
    """Raised when a tree is requested for an input with no symbols."""


class UnknownSymbolError(HuffmanError, KeyError):
    """Raised when a symbol being encoded has no entry in the code table.

    :ivar symbol: The symbol that could not be encoded.
    :ivar position: Index of ``symbol`` in the input sequence.
    :type position: int
    """

    def __init__(self, symbol, position: int):
        super().__init__(f"Symbol {symbol!r} at position {position} has no code")
        self.symbol = symbol
        self.position = position

    def __str__(self):
        # KeyError.__str__ quotes its argument
        return self.args[0]


class TruncatedStreamError(HuffmanError, EOFError):
    """Raised when the bit stream ends before all symbols are decoded.

    :ivar decoded: Number of units produced before the stream ran out.
    :type decoded: int
    :ivar expected: Number of units that were requested.
    :type expected: int
    """

    def __init__(self, decoded: int, expected: int, unit: str = "symbols"):
        super().__init__(
            f"Stream exhausted after {decoded} of {expected} {unit}"
        )
        self.decoded = decoded
        self.expected = expected


class InvalidStreamError(HuffmanError, ValueError):
    """Raised when a stream digit is not a valid step through the tree."""
