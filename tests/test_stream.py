import pytest

from chainprims.stream import Encodable, RlpStream, rlp_bytes

LOREM = "Lorem ipsum dolor sit amet, consectetur adipisicing elit"


def enc(value):
    return RlpStream().append(value).out()


def enc_list(values):
    return RlpStream().append_list(values).out()


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "80"),
        (0x100, "820100"),
        (0xFFFF, "82ffff"),
        (0x0001_0000, "83010000"),
        (0x00FF_FFFF, "83ffffff"),
        (0x0100_0000, "8401000000"),
        (0xFFFF_FFFF, "84ffffffff"),
        (0x0100_0000_0000_0000, "880100000000000000"),
        (0xFFFF_FFFF_FFFF_FFFF, "88ffffffffffffffff"),
        (
            0x8090A0B0C0D0E0F00910203040506077000000000000000100000000000012F0,
            "a08090a0b0c0d0e0f00910203040506077000000000000000100000000000012f0",
        ),
    ],
)
def test_encode_integers(value, expected):
    assert enc(value) == bytes.fromhex(expected)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("cat", b"\x83cat"),
        ("dog", b"\x83dog"),
        ("Marek", b"\x85Marek"),
        ("", b"\x80"),
        (LOREM, b"\xb8\x38" + LOREM.encode()),
    ],
)
def test_encode_str(value, expected):
    assert enc(value) == expected


def test_encode_address():
    address = bytes.fromhex("ef2d6d194084c2de36e0dabfce45d046b37d1106")
    assert enc(address) == bytes.fromhex("94ef2d6d194084c2de36e0dabfce45d046b37d1106")


@pytest.mark.parametrize(
    "value, expected",
    [(b"", "80"), (b"\x00", "00"), (b"\x15", "15"), (b"\x40\x00", "824000")],
)
def test_encode_bytes_as_single_value(value, expected):
    assert enc(value) == bytes.fromhex(expected)
    assert enc(bytearray(value)) == bytes.fromhex(expected)


@pytest.mark.parametrize(
    "values, expected",
    [
        ([], "c0"),
        ([15], "c10f"),
        ([1, 2, 3, 7, 0xFF], "c60102030781ff"),
        ([0xFFFF_FFFF, 1, 2, 3, 7, 0xFF], "cb84ffffffff0102030781ff"),
    ],
)
def test_encode_vector_u64(values, expected):
    assert enc_list(values) == bytes.fromhex(expected)


def test_encode_vector_str():
    assert enc_list(["cat", "dog"]) == b"\xc8\x83cat\x83dog"


def test_encode_into_existing_buffer():
    first = RlpStream(b"junk!").append("cat").out()
    second = RlpStream(first + b" and ").append("dog").out()
    assert second == b"junk!\x83cat and \x83dog"


def test_clear():
    stream = RlpStream(b"junk")
    stream.append("parrot")
    stream.clear()
    stream.append("cat")
    assert stream.out() == b"junk\x83cat"


def test_clear_open_list():
    stream = RlpStream.new_list(3)
    stream.append("cat")
    stream.clear()
    stream.append("dog")
    assert stream.out() == b"\x83dog"


def test_append_empty_data():
    stream = RlpStream.new_list(2)
    stream.append_empty_data().append_empty_data()
    assert stream.out() == bytes([0xC2, 0x80, 0x80])


def test_append_chain():
    stream = RlpStream.new_list(2)
    stream.append("cat").append("dog")
    assert stream.out() == b"\xc8\x83cat\x83dog"


def test_append_iter():
    stream = RlpStream.new_list(2)
    stream.append("cat").append_iter(iter(b"dog"))
    assert stream.out() == b"\xc8\x83cat\x83dog"


def test_nested_begin_list():
    stream = RlpStream.new_list(2)
    stream.begin_list(2).append("cat").append("dog")
    stream.append("")
    assert stream.out() == b"\xca\xc8\x83cat\x83dog\x80"


def test_is_finished():
    stream = RlpStream.new_list(2)
    stream.append("cat")
    assert stream.is_finished() is False
    stream.append("dog")
    assert stream.is_finished() is True
    assert stream.out() == b"\xc8\x83cat\x83dog"


def test_nested_empty_list_encode():
    stream = RlpStream.new_list(2)
    stream.append_list([])
    stream.append(0x28)
    assert stream.out() == bytes.fromhex("c2c028")


def test_nested_empty_lists():
    stream = RlpStream.new_list(3)
    stream.begin_list(0)
    stream.begin_list(1).begin_list(0)
    stream.begin_list(2).begin_list(0).begin_list(1).begin_list(0)
    assert stream.out() == bytes([0xC7, 0xC0, 0xC1, 0xC0, 0xC3, 0xC0, 0xC1, 0xC0])


def test_python_nested_lists_match_stream():
    assert enc([[], [[]], [[], [[]]]]) == bytes(
        [0xC7, 0xC0, 0xC1, 0xC0, 0xC3, 0xC0, 0xC1, 0xC0]
    )


@pytest.mark.parametrize("limit", range(40, 270))
def test_stream_size_limit(limit):
    stream = RlpStream()
    while stream.append_raw_checked(b"\x00", 1, limit):
        pass
    assert len(stream.out()) == limit


def test_unbounded_list():
    stream = RlpStream()
    stream.begin_unbounded_list()
    stream.append(40)
    stream.append(41)
    assert stream.is_finished() is False
    stream.finalize_unbounded_list()
    assert stream.is_finished() is True


def test_unbounded_matches_bounded():
    unbounded = RlpStream()
    unbounded.begin_unbounded_list().append(40).append(41).finalize_unbounded_list()
    assert unbounded.out() == RlpStream.new_list(2).append(40).append(41).out()


def test_long_list_header():
    stream = RlpStream.new_list(60)
    for _ in range(60):
        stream.append_empty_data()
    out = stream.out()
    assert out[0] == 0xF8
    assert out[1] == len(out) - 2
    assert set(out[2:]) == {0x80}


def test_len_matches_output_for_long_unbounded_list():
    stream = RlpStream()
    stream.begin_unbounded_list()
    stream.append_raw(b"\x00" * 300, 300)
    expected = len(stream)
    stream.finalize_unbounded_list()
    assert len(stream.out()) == expected


def test_bool_same_as_int():
    assert enc(False) == enc(0)
    assert enc(True) == enc(1)


def test_append_optional():
    assert RlpStream().append_optional(None).out() == b"\xc0"
    assert RlpStream().append_optional("cat").out() == bytes([0xC4, 0x83]) + b"cat"


def test_append_internal_does_not_count():
    stream = RlpStream.new_list(1)
    stream.append_internal("cat")
    assert stream.is_finished() is False
    stream.append("dog")
    assert stream.out() == b"\xc8\x83cat\x83dog"


def test_as_raw_includes_prefix():
    stream = RlpStream(b"junk")
    stream.append("cat")
    assert stream.as_raw() == b"junk\x83cat"


def test_too_many_items_raises():
    stream = RlpStream.new_list(1)
    stream.append(1)
    stream.begin_list(1)
    stream._lists  # list is open again
    stream.append(2)
    with pytest.raises(RuntimeError):
        RlpStream.new_list(1).append_raw(b"\x01\x02", 2)


def test_out_unfinished_raises():
    stream = RlpStream.new_list(2)
    stream.append("cat")
    with pytest.raises(RuntimeError):
        stream.out()


def test_finalize_without_open_list_raises():
    with pytest.raises(RuntimeError):
        RlpStream().finalize_unbounded_list()


def test_finalize_bounded_list_raises():
    stream = RlpStream.new_list(2)
    with pytest.raises(RuntimeError):
        stream.finalize_unbounded_list()


def test_negative_int_raises():
    with pytest.raises(ValueError):
        enc(-1)


def test_unsupported_type_raises():
    with pytest.raises(TypeError):
        enc(1.5)


class Inner(Encodable):
    def __init__(self, a, b):
        self.a = a
        self.b = b

    def rlp_append(self, stream):
        stream.begin_unbounded_list().append(self.a).append(self.b).finalize_unbounded_list()


class Nest(Encodable):
    def __init__(self, items):
        self.items = items

    def rlp_append(self, stream):
        stream.begin_unbounded_list().append_list(self.items).finalize_unbounded_list()


def test_encodable_inner_matches_plain_list():
    assert Inner(0, 1).rlp_bytes() == enc([0, 1])


def test_nested_encodables():
    nest = Nest([Inner(i, i + 1) for i in range(4)])
    expected = enc([[[i, i + 1] for i in range(4)]])
    assert rlp_bytes(nest) == expected
    assert enc(nest) == expected
    nest2 = Nest([nest, nest])
    assert enc(nest2) == enc([[[[[i, i + 1] for i in range(4)]]] * 2])


def test_rlp_bytes_of_primitive():
    assert rlp_bytes("cat") == b"\x83cat"