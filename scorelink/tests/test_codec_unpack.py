import unittest

from scorelink.codec import ScalarKind, pack, unpack, unpack_from, unpack_single
from scorelink.utils.exceptions import (
    UsageError, UnsupportedTypeError, BufferTooShortError, ValueOutOfRangeError,
)

K = ScalarKind


class TestUnpack(unittest.TestCase):
    def test_match_state_record(self):
        data = bytes([0x01, 0x2A, 0x00, 0x00, 0x64, 0x00, 0x32, 0x00])
        result = unpack("<?h?hh", data, [K.BOOL, K.INT16, K.BOOL, K.INT16, K.INT16])
        self.assertEqual(result, (True, 42, False, 100, 50))

    def test_any_nonzero_byte_is_true(self):
        self.assertEqual(unpack("?", b"\xff"), (True,))
        self.assertEqual(unpack("?", b"\x80"), (True,))
        self.assertEqual(unpack("?", b"\x00"), (False,))

    def test_default_kinds_follow_directives(self):
        self.assertEqual(unpack("<hH", b"\xff\xff\xff\xff"), (-1, 65535))

    def test_big_endian(self):
        self.assertEqual(unpack(">I", b"\x00\x00\x01\x00"), (256,))

    def test_mode_persists_until_overridden(self):
        self.assertEqual(unpack("<HH>H", b"\x01\x00\x02\x00\x00\x03"), (1, 2, 3))

    def test_padding_is_skipped(self):
        self.assertEqual(unpack("<xBxB", b"\x09\x01\x09\x02"), (1, 2))

    def test_trailing_bytes_are_ignored(self):
        self.assertEqual(unpack("<H", b"\x01\x00\xff\xff"), (1,))

    def test_accepts_bytes_like_buffers(self):
        self.assertEqual(unpack("<H", bytearray(b"\x01\x00")), (1,))
        self.assertEqual(unpack("<H", memoryview(b"\x01\x00")), (1,))


class TestUnpackRequestedKinds(unittest.TestCase):
    def test_widening(self):
        self.assertEqual(unpack("<b", b"\xff", [K.INT64]), (-1,))

    def test_narrowing_in_range(self):
        self.assertEqual(unpack("<I", b"\x05\x00\x00\x00", [K.UINT8]), (5,))

    def test_narrowing_out_of_range(self):
        with self.assertRaises(ValueOutOfRangeError):
            unpack("<I", b"\xff\xff\xff\xff", [K.INT16])

    def test_integer_requested_as_bool(self):
        self.assertEqual(unpack("<H", b"\x00\x01", [K.BOOL]), (True,))
        self.assertEqual(unpack("<H", b"\x00\x00", [K.BOOL]), (False,))

    def test_bool_requested_as_integer(self):
        self.assertEqual(unpack("?", b"\x07", [K.UINT8]), (1,))

    def test_unsupported_requested_kind(self):
        with self.assertRaises(UnsupportedTypeError):
            unpack("<i", bytes(4), [int])
        with self.assertRaises(UnsupportedTypeError):
            unpack("<i", bytes(4), ["int32"])


class TestUnpackErrors(unittest.TestCase):
    def test_too_few_requested_kinds(self):
        with self.assertRaises(UsageError):
            unpack("<ii", bytes(8), [K.INT32])

    def test_too_many_requested_kinds(self):
        with self.assertRaises(UsageError):
            unpack("<i", bytes(8), [K.INT32, K.INT32])

    def test_count_is_checked_before_buffer_length(self):
        with self.assertRaises(UsageError):
            unpack("<ii", b"", [K.INT32])

    def test_buffer_too_short(self):
        with self.assertRaises(BufferTooShortError):
            unpack("<?h?hh", bytes(7))
        with self.assertRaises(BufferTooShortError):
            unpack("<xI", bytes(4))

    def test_unknown_directive(self):
        with self.assertRaises(UnsupportedTypeError):
            unpack("<d", bytes(8))


class TestUnpackFrom(unittest.TestCase):
    def test_offset(self):
        self.assertEqual(unpack_from("<H", b"\x00\x00\x02\x01", 2), (0x0102,))

    def test_short_after_offset(self):
        with self.assertRaises(BufferTooShortError):
            unpack_from("<I", bytes(6), 3)

    def test_negative_offset(self):
        with self.assertRaises(UsageError):
            unpack_from("<B", bytes(2), -1)


class TestUnpackSingle(unittest.TestCase):
    def test_default_kind(self):
        self.assertEqual(unpack_single("<H", b"\x01\x02"), 0x0201)

    def test_requested_kind(self):
        self.assertIs(unpack_single("<B", b"\x02", K.BOOL), True)

    def test_format_with_several_values(self):
        with self.assertRaises(UsageError):
            unpack_single("<HH", bytes(4))
        with self.assertRaises(UsageError):
            unpack_single("<HH", bytes(4), K.UINT16)


class TestRoundTrip(unittest.TestCase):
    def test_range_boundaries_in_both_byte_orders(self):
        for kind in ScalarKind:
            for order in "<>":
                fmt = order + kind.directive
                for value in (kind.min_value, kind.max_value):
                    expected = bool(value) if kind is ScalarKind.BOOL else value
                    with self.subTest(fmt=fmt, value=value):
                        self.assertEqual(unpack(fmt, pack(fmt, value), [kind]), (expected,))


if __name__ == "__main__":
    unittest.main()
