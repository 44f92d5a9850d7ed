"""
Transport encodings of the SAML HTTP-Redirect and HTTP-POST bindings.

The HTTP-Redirect binding carries a message as base64(DEFLATE(xml)), where
DEFLATE is the raw format of RFC 1951 without zlib or gzip framing. The
HTTP-POST binding carries it as plain base64(xml).
"""
import base64
import binascii
import zlib

from .exception import DecodeError
from .exception import DecompressError


def decode_base64(data):
    """
    Decodes standard (not URL-safe) base64. Line breaks are skipped, as
    base64 may be wrapped into lines (RFC 2045); any other character outside
    the alphabet is an error.

    :type data: str | bytes
    :rtype: bytes

    :param data: base64 text
    :return: the decoded bytes
    :raise DecodeError: if data is not valid base64
    """
    if isinstance(data, str):
        data = data.replace("\r", "").replace("\n", "")
    else:
        data = data.replace(b"\r", b"").replace(b"\n", b"")

    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError("Cannot decode base64: {}".format(e)) from e


def encode_base64(data):
    """
    Encodes bytes as standard base64 on a single line.

    :type data: bytes
    :rtype: str
    """
    return base64.b64encode(data).decode("ascii")


def inflate(data):
    """
    Decompresses a raw DEFLATE stream, which must be complete.

    :type data: bytes
    :rtype: bytes

    :param data: the compressed stream
    :return: the decompressed bytes
    :raise DecompressError: if the stream is malformed or truncated
    """
    decompressor = zlib.decompressobj(-zlib.MAX_WBITS)
    try:
        inflated = decompressor.decompress(data)
        inflated += decompressor.flush()
    except zlib.error as e:
        raise DecompressError("Cannot inflate: {}".format(e)) from e

    if not decompressor.eof:
        raise DecompressError("Cannot inflate: unexpected end of compressed stream")
    return inflated


def deflate(data):
    """
    Compresses bytes into a raw DEFLATE stream.

    :type data: bytes
    :rtype: bytes
    """
    compressor = zlib.compressobj(zlib.Z_DEFAULT_COMPRESSION, zlib.DEFLATED, -zlib.MAX_WBITS)
    return compressor.compress(data) + compressor.flush()
