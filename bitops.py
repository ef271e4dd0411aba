from errors import InvalidStreamError, TruncatedStreamError


class BitWriter:
    """Packs a stream of ``'0'``/``'1'`` digits into bytes, MSB first.

    :ivar buffer: Fully written bytes.
    :type buffer: bytearray
    :ivar bit_buffer: Scratch register for the pending partial byte.
    :type bit_buffer: int
    :ivar bit_count: Number of valid bits in ``bit_buffer`` (0-7).
    :type bit_count: int
    :ivar bit_length: Total number of bits written so far.
    :type bit_length: int
    """

    def __init__(self):
        self.buffer = bytearray()
        self.bit_buffer = 0
        self.bit_count = 0
        self.bit_length = 0

    def write_code(self, code: str):
        """Append the digits of ``code`` to the output.

        :param code: String of ``'0'``/``'1'`` characters.
        :type code: str
        :returns: None
        :rtype: None
        :raises InvalidStreamError: If ``code`` holds any other character.
        """
        for digit in code:
            if digit == "1":
                self.bit_buffer = (self.bit_buffer << 1) | 1
            elif digit == "0":
                self.bit_buffer <<= 1
            else:
                raise InvalidStreamError(f"Invalid digit {digit!r}")
            self.bit_count += 1
            self.bit_length += 1
            if self.bit_count == 8:
                self.buffer.append(self.bit_buffer)
                self.bit_buffer = 0
                self.bit_count = 0

    def flush(self) -> bytes:
        """Pad the pending partial byte with zeros and return all bytes.

        :returns: The packed bytes written so far.
        :rtype: bytes
        """
        if self.bit_count > 0:
            self.bit_buffer <<= (8 - self.bit_count)
            self.buffer.append(self.bit_buffer)
            self.bit_buffer = 0
            self.bit_count = 0
        return bytes(self.buffer)


class BitReader:
    """Reads single bits back out of packed bytes, MSB first.

    :ivar data: Packed input.
    :type data: bytes
    :ivar pos: Index of the next byte to load.
    :type pos: int
    :ivar bit_buffer: The byte currently being read.
    :type bit_buffer: int
    :ivar bit_count: Unread bits left in ``bit_buffer`` (0-8).
    :type bit_count: int
    """

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0
        self.bit_buffer = 0
        self.bit_count = 0

    def read_bit(self) -> str:
        """Read the next bit as a ``'0'`` or ``'1'`` character.

        :returns: The next digit.
        :rtype: str
        :raises EOFError: If no bits are left.
        """
        if self.bit_count == 0:
            if self.pos >= len(self.data):
                raise EOFError("Unexpected end of data")
            self.bit_buffer = self.data[self.pos]
            self.pos += 1
            self.bit_count = 8
        self.bit_count -= 1
        return "1" if (self.bit_buffer >> self.bit_count) & 1 else "0"

    def read_code(self, nbits: int) -> str:
        """Read ``nbits`` bits as a string of digits.

        :param nbits: Number of bits to read.
        :type nbits: int
        :returns: The digits read.
        :rtype: str
        :raises TruncatedStreamError: If fewer than ``nbits`` bits remain.
        """
        digits = []
        try:
            for _ in range(nbits):
                digits.append(self.read_bit())
        except EOFError:
            raise TruncatedStreamError(len(digits), nbits, unit="bits") from None
        return "".join(digits)


def pack_bits(stream: str) -> bytes:
    """Pack an encoded stream into bytes, zero padded to a byte boundary."""
    writer = BitWriter()
    writer.write_code(stream)
    return writer.flush()


def unpack_bits(data: bytes, nbits: int) -> str:
    """Unpack the first ``nbits`` bits of ``data`` back into digits.

    Padding bits past ``nbits`` are left unread.
    """
    return BitReader(data).read_code(nbits)
