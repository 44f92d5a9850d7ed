import pytest

from minidp.encoding import decode_base64
from minidp.encoding import deflate
from minidp.encoding import encode_base64
from minidp.encoding import inflate
from minidp.exception import DecodeError
from minidp.exception import DecompressError


class TestBase64:
    @pytest.mark.parametrize("data", [
        b"",
        b"\x00\xff\xfe",
        "<saml:NameID>åäö</saml:NameID>".encode("utf-8"),
        bytes(range(256)) * 4,
    ])
    def test_decode_reverses_encode(self, data):
        assert decode_base64(encode_base64(data)) == data

    def test_encode_does_not_wrap_lines(self):
        encoded = encode_base64(b"x" * 1000)
        assert "\n" not in encoded

    def test_encode_uses_standard_alphabet(self):
        assert encode_base64(b"\xfb\xff") == "+/8="

    def test_decode_accepts_str_and_bytes(self):
        assert decode_base64("aGVsbG8=") == b"hello"
        assert decode_base64(b"aGVsbG8=") == b"hello"

    def test_decode_skips_line_breaks(self):
        encoded = encode_base64(bytes(range(256)))
        wrapped = "\r\n".join(encoded[i:i + 76] for i in range(0, len(encoded), 76)) + "\n"

        assert decode_base64(wrapped) == bytes(range(256))
        assert decode_base64(wrapped.encode("ascii")) == bytes(range(256))
        assert decode_base64("aGVs\nbG8=") == b"hello"

    @pytest.mark.parametrize("data", [
        "not base64!",
        "aGVsbG8",
        "-_8=",
        "åäö",
        "aGVs bG8=",
        "aGVs\tbG8=",
        "aGVs\x0bbG8=",
    ])
    def test_decode_malformed_input(self, data):
        with pytest.raises(DecodeError) as exc_info:
            decode_base64(data)
        assert exc_info.value.stage == "decode"


class TestDeflate:
    @pytest.mark.parametrize("data", [
        b"",
        b"a",
        b"<samlp:AuthnRequest/>" * 500,
        bytes(range(256)),
    ])
    def test_inflate_reverses_deflate(self, data):
        assert inflate(deflate(data)) == data

    def test_deflate_is_raw(self):
        # zlib streams start with a 0x78 header byte, gzip with 0x1f 0x8b
        compressed = deflate(b"hello hello hello")
        assert compressed[:1] != b"\x78"
        assert compressed[:2] != b"\x1f\x8b"

    def test_inflate_truncated_stream(self):
        compressed = deflate(b"<samlp:AuthnRequest/>" * 100)
        with pytest.raises(DecompressError) as exc_info:
            inflate(compressed[:len(compressed) // 2])
        assert exc_info.value.stage == "decompress"

    def test_inflate_empty_input(self):
        with pytest.raises(DecompressError):
            inflate(b"")

    def test_inflate_malformed_stream(self):
        with pytest.raises(DecompressError):
            inflate(b"\xff\xfe\xfd\xfc")
