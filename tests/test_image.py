import struct

import pytest

from disarray.image import Image, TgaError, load_tga, parse_tga


def header(width, height, bits, image_type=2, id_length=0, map_length=0):
    return struct.pack("<BBBHHBHHHHBB", id_length, 0, image_type, 0, map_length,
                       0, 0, 0, width, height, bits, 0)


def test_round_trip_rgba():
    data = bytes(range(16))
    image = Image(2, 2, 32, data)
    decoded = parse_tga(image.to_tga_bytes())
    assert decoded == Image(2, 2, 32, data)


def test_written_header_fields():
    encoded = Image(2, 1, 32, bytes(8)).to_tga_bytes()
    assert len(encoded) == 18 + 8
    assert encoded[2] == 2
    assert encoded[16] == 32
    assert struct.unpack_from("<HH", encoded, 12) == (2, 1)


def test_written_pixels_are_bgra():
    encoded = Image(1, 1, 32, bytes([10, 20, 30, 40])).to_tga_bytes()
    assert encoded[18:] == bytes([30, 20, 10, 40])


def test_save_rejects_wrong_size():
    with pytest.raises(ValueError):
        Image(2, 2, 32, bytes(3)).to_tga_bytes()


def test_save_and_load_file(tmp_path):
    image = Image(1, 2, 32, bytes([1, 2, 3, 4, 5, 6, 7, 8]))
    path = tmp_path / "pic.tga"
    image.save_tga(path)
    assert load_tga(path) == image


def test_uncompressed_24_bit():
    data = header(2, 1, 24) + bytes([1, 2, 3, 4, 5, 6])
    image = parse_tga(data)
    assert image.bits == 24
    assert image.data == bytes([3, 2, 1, 6, 5, 4])


def test_id_and_colour_map_are_skipped():
    data = header(1, 1, 24, id_length=2, map_length=1) + b"ab" + bytes(3) + bytes([7, 8, 9])
    assert parse_tga(data).data == bytes([9, 8, 7])


def test_rle_repeat_packet():
    data = header(3, 1, 24, image_type=10) + bytes([0x82, 1, 2, 3])
    assert parse_tga(data).data == bytes([3, 2, 1]) * 3


def test_rle_raw_packet():
    data = header(2, 1, 24, image_type=10) + bytes([0x01, 1, 2, 3, 4, 5, 6])
    assert parse_tga(data).data == bytes([3, 2, 1, 6, 5, 4])


def test_rle_with_alpha():
    data = header(1, 1, 32, image_type=10) + bytes([0x00, 1, 2, 3, 4])
    assert parse_tga(data).data == bytes([3, 2, 1, 4])


def test_rle_overrun_raises():
    data = header(1, 1, 24, image_type=10) + bytes([0x82, 1, 2, 3])
    with pytest.raises(TgaError):
        parse_tga(data)


def test_unsupported_type_raises():
    with pytest.raises(TgaError):
        parse_tga(header(1, 1, 24, image_type=3) + bytes(3))


def test_low_depth_raises():
    with pytest.raises(TgaError):
        parse_tga(header(1, 1, 16) + bytes(2))


def test_short_header_raises():
    with pytest.raises(TgaError):
        parse_tga(bytes(10))


def test_truncated_pixels_raise():
    with pytest.raises(TgaError):
        parse_tga(header(2, 2, 24) + bytes(5))


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_tga(tmp_path / "absent.tga")