"""Parsing of the ``{tokenId}:{blueprint}`` minting blob delivered by the L2 bridge.

Both numbers are base-10 digit runs separated by ``:`` or ``/``. The parser
mirrors the on-chain one and never fails on malformed input; callers that need
to reject degenerate blobs check ``MintingBlob.well_formed`` or decode with
``strict=True``.
"""

from __future__ import annotations

from .models import MintingBlob, PlotStore
from .packing import unpack

DELIMITERS = frozenset(b":/")
_ZERO = ord("0")
_OPEN_BRACE = ord("{")
_CLOSE_BRACE = ord("}")


class MalformedMintingBlobError(ValueError):
    """Raised by strict decoding when the blob does not have the expected shape."""


def _as_bytes(data: bytes | str) -> bytes:
    # non-ASCII characters become bytes above 0x7f, which stop any digit run
    return data.encode("utf-8", errors="surrogatepass") if isinstance(data, str) else bytes(data)


def atoi(data: bytes | str, offset: int = 0) -> tuple[int, int]:
    """Accumulate decimal digits from ``offset``; return ``(value, stop_index)``.

    Stops at the first non-digit byte or at the end of input. There is no sign,
    whitespace skipping or overflow check.
    """
    buf = _as_bytes(data)
    value = 0
    p = offset
    while p < len(buf) and _ZERO <= buf[p] <= _ZERO + 9:
        value = value * 10 + buf[p] - _ZERO
        p += 1
    return value, p


def _read_number(buf: bytes, p: int) -> tuple[int, int, bool]:
    # an optional pair of braces around the digits, as in the IMX blueprint form
    braced = p < len(buf) and buf[p] == _OPEN_BRACE
    start = p + 1 if braced else p
    value, stop = atoi(buf, start)
    ok = stop > start
    if braced:
        if stop < len(buf) and buf[stop] == _CLOSE_BRACE:
            stop += 1
        else:
            ok = False
    return value, stop, ok


def parse_minting_blob(data: bytes | str) -> MintingBlob:
    buf = _as_bytes(data)

    token_id, p, token_ok = _read_number(buf, 0)
    delimiter_ok = p < len(buf) and buf[p] in DELIMITERS
    # the delimiter byte is skipped without being checked further
    metadata, end, metadata_ok = _read_number(buf, min(p + 1, len(buf)))

    return MintingBlob(
        token_id=token_id,
        metadata=metadata,
        well_formed=token_ok and delimiter_ok and metadata_ok and end == len(buf),
    )


def format_minting_blob(token_id: int, metadata: int, *, braces: bool = False) -> str:
    if token_id < 0 or metadata < 0:
        raise ValueError("token_id and metadata must not be negative")
    if braces:
        return f"{{{token_id}}}:{{{metadata}}}"
    return f"{token_id}:{metadata}"


def decode_minting_blob(data: bytes | str, *, strict: bool = False) -> tuple[int, PlotStore]:
    """Parse a minting blob and unpack its blueprint into a plot record."""
    blob = parse_minting_blob(data)
    if strict and not blob.well_formed:
        raise MalformedMintingBlobError(f"Malformed minting blob: {data!r}")
    return blob.token_id, unpack(blob.metadata)
