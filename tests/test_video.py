import pytest

from velera.video import BGR555, RGBA, InputStates


@pytest.mark.parametrize(
    "data, expected",
    [
        ([0, 0, 0xFF], 0b0111110000000000),
        ([0, 0xFF, 0], 0b0000001111100000),
        ([0xFF, 0, 0], 0b0000000000011111),
    ],
)
def test_bgr555_from_rgb_bytes(data, expected):
    assert BGR555.from_bytes(data) == BGR555(expected)


@pytest.mark.parametrize(
    "bgr, expected",
    [
        (0b0111111111111111, 0xFFFFFF),
        (0b0111110000000000, 0x0000FF),
        (0b0000001111100000, 0x00FF00),
        (0b0000000000011111, 0xFF0000),
    ],
)
def test_rgba_from_bgr555(bgr, expected):
    assert RGBA.from_bgr555(BGR555(bgr)) == RGBA(expected)


def test_bgr555_from_two_bytes_is_little_endian():
    assert BGR555.from_bytes(b"\x34\x12") == BGR555(0x1234)


def test_bgr555_from_more_bytes_uses_first_two():
    assert BGR555.from_bytes([0x34, 0x12, 0x56, 0x78]) == BGR555(0x1234)


@pytest.mark.parametrize("data", [b"", b"\x01"])
def test_bgr555_from_too_few_bytes(data):
    with pytest.raises(ValueError):
        BGR555.from_bytes(data)


def test_bgr555_rejects_out_of_range():
    with pytest.raises(ValueError):
        BGR555(0x10000)


def test_bgr555_from_rgba_white_and_black():
    assert BGR555.from_rgba(RGBA(0xFFFFFF)) == BGR555(0x7FFF)
    assert BGR555.from_rgba(0) == BGR555(0)


def test_rgba_to_rgb():
    assert RGBA(0x123456).to_rgb() == (0x12, 0x34, 0x56)


def test_rgba_accepts_int_for_bgr():
    assert RGBA.from_bgr555(0b0111110000000000) == RGBA(0x0000FF)


def test_input_states_single_key():
    states = InputStates.from_u16(0b1)
    assert states.a is True
    assert states.pressed() == ["a"]
    assert states.exit is False


def test_input_states_bit_positions():
    states = InputStates.from_u16(1 << 9)
    assert states.l is True
    assert states.r is False
    assert InputStates(start=True, down=True).to_u16() == (1 << 3) | (1 << 7)


@pytest.mark.parametrize("raw", [0, 1, 0b1010101010, 0x3FF, 0x155])
def test_input_states_round_trip(raw):
    assert InputStates.from_u16(raw).to_u16() == raw


def test_input_states_ignores_high_bits():
    assert InputStates.from_u16(0xFFFF).to_u16() == 0x3FF