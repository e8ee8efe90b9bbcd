import sys

import numpy as np
import pytest

from camfits.pixels import PixelCodec
from camfits.tests import CamfitsTestCase
from camfits.util import lendian


class TestPixelCodec(CamfitsTestCase):
    def test_lendian(self):
        assert lendian() == (sys.byteorder == 'little')
        assert PixelCodec().little_endian == lendian()

    def test_to_file(self):
        pixels = np.array([0, 1, 32768, 65535], dtype=np.uint16)
        PixelCodec().to_file(pixels)
        expected = np.array([-32768, -32767, 0, 32767], dtype='>i2')
        assert pixels.tobytes() == expected.tobytes()

    def test_to_file_other_bzero(self):
        pixels = np.array([1, 2, 300], dtype=np.uint16)
        PixelCodec(bzero=0).to_file(pixels)
        assert pixels.tobytes() == np.array([1, 2, 300], '>i2').tobytes()

    def test_round_trip_both_byte_orders(self):
        original = np.array([[0, 1, 2], [32767, 32768, 65535]],
                            dtype=np.uint16)
        results = []
        for little_endian in (True, False):
            codec = PixelCodec(little_endian=little_endian)
            pixels = original.copy()
            codec.to_file(pixels)
            codec.from_file(pixels)
            results.append(pixels)
        assert (results[0] == original).all()
        assert (results[1] == original).all()

    def test_decode_int16(self):
        raw = np.array([-32768, 0, 32767], dtype='>i2').tobytes()
        pixels = PixelCodec().decode(raw, 3, 16)
        assert pixels.dtype == np.uint16
        assert pixels.tolist() == [0, 32768, 65535]

    def test_decode_int32_is_narrowed(self):
        raw = np.array([-32768, 0, 32767, 40000, -40000],
                       dtype='>i4').tobytes()
        pixels = PixelCodec().decode(raw, 5, 32)
        assert pixels.dtype == np.uint16
        assert pixels.tolist() == [0, 32768, 65535, 72768 - 65536,
                                   65536 - 7232]

    def test_decode_float32_is_clamped(self):
        raw = np.array([-5.0, 0.0, 1.9, 1234.7, 70000.0, np.nan],
                       dtype='>f4').tobytes()
        pixels = PixelCodec().decode(raw, 6, -32)
        assert pixels.dtype == np.uint16
        assert pixels.tolist() == [0, 0, 1, 1234, 65535, 0]

    def test_float32_has_no_bias(self):
        raw = np.array([100.0], dtype='>f4').tobytes()
        assert PixelCodec(bzero=32768).decode(raw, 1, -32).tolist() == [100]

    def test_decode_unsupported_bitpix(self):
        with pytest.raises(ValueError):
            PixelCodec().decode(b'\0' * 8, 1, 64)

    def test_decode_leaves_raw_alone(self):
        raw = bytearray(np.array([1, 2], dtype='>i2').tobytes())
        before = bytes(raw)
        PixelCodec().decode(raw, 2, 16)
        assert bytes(raw) == before

    def test_only_uint16(self):
        with pytest.raises(TypeError):
            PixelCodec().to_file(np.zeros(4, dtype=np.int32))
        with pytest.raises(TypeError):
            PixelCodec().to_file(b'\0\0')

    def test_only_contiguous(self):
        pixels = np.zeros((4, 4), dtype=np.uint16)
        with pytest.raises(ValueError):
            PixelCodec().to_file(pixels[:, ::2])
