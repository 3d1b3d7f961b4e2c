import unittest

from tests._test_path import SRC  # noqa: F401

from photofusion.core.datauri import build_data_uri, decode_data_uri, parse_data_uri


class TestDataUri(unittest.TestCase):
    def test_build_and_parse(self):
        uri = build_data_uri("image/webp", "AAEC")
        self.assertEqual(uri, "data:image/webp;base64,AAEC")
        self.assertEqual(parse_data_uri(uri), ("image/webp", "AAEC"))

    def test_decode(self):
        media_type, data = decode_data_uri("data:image/png;base64,AAEC")
        self.assertEqual(media_type, "image/png")
        self.assertEqual(data, b"\x00\x01\x02")

    def test_rejects_non_data_uri(self):
        with self.assertRaises(ValueError):
            parse_data_uri("https://example.com/x.png")
        with self.assertRaises(ValueError):
            parse_data_uri("data:image/png,rawtext")

    def test_rejects_bad_base64(self):
        with self.assertRaises(ValueError):
            decode_data_uri("data:image/png;base64,@@@")
