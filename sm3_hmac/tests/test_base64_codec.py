import random
import unittest

from sm3_hmac.src.base64_codec import (
    encode, decode, encoded_length, decoded_length,
    Base64DecodeError, STANDARD, URL_SAFE,
)


class TestBase64Encode(unittest.TestCase):
    """Base64编码"""

    def test_rfc4648_samples(self):
        samples = {
            b"": "",
            b"f": "Zg==",
            b"fo": "Zm8=",
            b"foo": "Zm9v",
            b"foob": "Zm9vYg==",
            b"fooba": "Zm9vYmE=",
            b"foobar": "Zm9vYmFy",
        }
        for raw, text in samples.items():
            self.assertEqual(encode(raw), text)
            self.assertEqual(encode(raw, URL_SAFE), text.rstrip("="))

    def test_alphabet_substitution(self):
        raw = b"\xfb\xff\xbf"
        self.assertEqual(encode(raw, STANDARD), "+/+/")
        self.assertEqual(encode(raw, URL_SAFE), "-_-_")

    def test_encoded_length(self):
        for n in range(0, 40):
            self.assertEqual(len(encode(bytes(n))), encoded_length(n))
            self.assertEqual(encoded_length(n), -(-n // 3) * 4)

    def test_decoded_length_bound(self):
        for n in range(0, 40):
            text = encode(bytes(n))
            self.assertGreaterEqual(decoded_length(len(text)), n)

    def test_unknown_alphabet(self):
        with self.assertRaises(ValueError):
            encode(b"abc", "base32")
        with self.assertRaises(ValueError):
            decode("YWJj", "base32")


class TestBase64Decode(unittest.TestCase):
    """Base64解码"""

    def test_round_trip(self):
        rng = random.Random(42)
        for alphabet in (STANDARD, URL_SAFE):
            for n in range(0, 70):
                raw = bytes(rng.getrandbits(8) for _ in range(n))
                with self.subTest(alphabet=alphabet, length=n):
                    self.assertEqual(decode(encode(raw, alphabet), alphabet), raw)

    def test_missing_padding_accepted(self):
        self.assertEqual(decode("Zg"), b"f")
        self.assertEqual(decode("Zm8"), b"fo")
        self.assertEqual(decode("Zg=", STANDARD), b"f")

    def test_url_safe_accepts_padding(self):
        self.assertEqual(decode("-_-_", URL_SAFE), b"\xfb\xff\xbf")
        self.assertEqual(decode("Zg==", URL_SAFE), b"f")

    def test_empty(self):
        self.assertEqual(decode(""), b"")
        self.assertEqual(decode("", URL_SAFE), b"")
        self.assertEqual(decode(b""), b"")

    def test_bytes_input(self):
        self.assertEqual(decode(b"Zm9vYmFy"), b"foobar")

    def test_rejects_length_residue_one(self):
        for text in ("Z", "Zm9vY", "Zm9vY=", "Zm9vYmFyZ"):
            with self.subTest(text=text):
                with self.assertRaises(Base64DecodeError):
                    decode(text)

    def test_rejects_invalid_characters(self):
        for text in ("Zm9v!", "Zm 9v", "Zm9v\n", "Zé==", "Zm-v"):
            with self.subTest(text=text):
                with self.assertRaises(Base64DecodeError):
                    decode(text, STANDARD)
        with self.assertRaises(Base64DecodeError):
            decode("Zm+v", URL_SAFE)
        with self.assertRaises(Base64DecodeError):
            decode(b"Zm\xff\xfe")

    def test_rejects_interior_padding(self):
        """'='只能出现在末尾"""
        for text in ("Zg==Zg==", "Z=g=", "=Zg", "Zm9v=Zm9v"):
            with self.subTest(text=text):
                with self.assertRaises(Base64DecodeError):
                    decode(text)

    def test_rejects_excess_padding(self):
        """填充只能补齐最后一组"""
        for text in ("Zg===", "=", "==", "Zm9v=", "Zm9v==", "Zm8=="):
            for alphabet in (STANDARD, URL_SAFE):
                with self.subTest(text=text, alphabet=alphabet):
                    with self.assertRaises(Base64DecodeError):
                        decode(text, alphabet)

    def test_partial_padding_accepted(self):
        self.assertEqual(decode("Zm8="), b"fo")
        self.assertEqual(decode("Zg="), b"f")
        self.assertEqual(decode("Zm9v"), b"foo")

    def test_error_is_value_error(self):
        with self.assertRaises(ValueError):
            decode("!!!!")


if __name__ == '__main__':
    unittest.main()
