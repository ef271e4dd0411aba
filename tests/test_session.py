import dataclasses

import pytest

from errors import EmptyInputError, TruncatedStreamError
from session import EncodedMessage, HuffmanSession


def test_session_roundtrip_text(sample_text):
    session = HuffmanSession()
    message = session.compress(sample_text)
    assert message.text is True
    assert message.symbol_count == len(sample_text)
    assert message.bit_length == len(message.bits)
    assert session.decompress(message) == sample_text


def test_session_keeps_last_tables(abracadabra):
    session = HuffmanSession()
    message = session.compress(abracadabra)
    assert session.frequencies == {"a": 5, "b": 2, "r": 2, "c": 1, "d": 1}
    assert session.root.freq == len(abracadabra)
    assert session.codes["a"] == "0"
    assert message.bits == "01101110100010101101110"


def test_session_roundtrip_token_list():
    tokens = ["to", "be", "or", "not", "to", "be"]
    session = HuffmanSession()
    message = session.compress(tokens)
    assert message.text is False
    assert session.decompress(message) == tokens


def test_session_degenerate_single_symbol():
    session = HuffmanSession()
    message = session.compress("aaaa")
    assert message.bits == "0000"
    assert session.decompress(message) == "aaaa"


def test_session_empty_input_raises():
    with pytest.raises(EmptyInputError):
        HuffmanSession().compress("")


def test_message_is_immutable(abracadabra):
    message = HuffmanSession().compress(abracadabra)
    with pytest.raises(dataclasses.FrozenInstanceError):
        message.bits = ""


def test_decompress_truncated_message_raises(abracadabra):
    message = HuffmanSession().compress(abracadabra)
    broken = dataclasses.replace(message, bits=message.bits[:5])
    with pytest.raises(TruncatedStreamError):
        HuffmanSession.decompress(broken)


def test_packed_message_roundtrip(sample_text):
    message = HuffmanSession().compress(sample_text)
    packed = message.packed()
    assert len(packed) == (message.bit_length + 7) // 8
    restored = EncodedMessage.from_packed(
        [list(entry) for entry in message.tree],
        message.symbol_count,
        packed,
        message.bit_length,
        text=True,
    )
    assert restored == message
    assert HuffmanSession.decompress(restored) == sample_text


def test_from_packed_short_data_raises(abracadabra):
    message = HuffmanSession().compress(abracadabra)
    with pytest.raises(TruncatedStreamError):
        EncodedMessage.from_packed(
            message.tree, message.symbol_count, message.packed()[:1],
            message.bit_length,
        )


def test_ratio(abracadabra):
    session = HuffmanSession()
    message = session.compress(abracadabra)
    assert session.ratio(message) == pytest.approx(11 * 8 / 23)
