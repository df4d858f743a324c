"""Typed sequential access to a surface file, as text tokens or binary words.

:class:`ByteStream` wraps one file handle and offers the two kinds of reads
the surface formats need:

* **text** — whitespace/newline separated decimal tokens, consumed ``n`` at
  a time as floats or integers, plus :meth:`ByteStream.peek_char` for the
  leading format marker;
* **binary** — fixed-width 8/32-bit integers and 32-bit floats in an
  explicitly selected byte order, plus newline-terminated lines for the
  comment header embedded in FreeSurfer files.

The same file can be reopened from its start in the other mode with
:meth:`ByteStream.reopen`, because the MNI polygon encoding is only known
after looking at its first character.
"""

import logging
import os

import numpy as np

from ..utils.errors import SurfaceReadError, TruncatedDataError

logger = logging.getLogger(__name__)

_BYTEORDERS = {
    ">": ">",
    "big": ">",
    "<": "<",
    "little": "<",
}

_MODES = ("text", "binary")

# Characters pulled from a text file per refill of the token buffer.
_TEXT_CHUNK = 1 << 16


def normalize_byteorder(byteorder):
    """Return the numpy byte-order character for *byteorder*.

    Parameters
    ----------
    byteorder : {'>', 'big', '<', 'little'}

    Returns
    -------
    str
        ``'>'`` or ``'<'``.

    Raises
    ------
    ValueError
        If *byteorder* is not recognised.
    """
    try:
        return _BYTEORDERS[byteorder]
    except (KeyError, TypeError) as exc:
        raise ValueError(
            f"byteorder must be one of {sorted(_BYTEORDERS)}, got {byteorder!r}."
        ) from exc


def _check_count(count):
    count = int(count)
    if count < 0:
        raise ValueError(f"Cannot read a negative number of items ({count}).")
    return count


def check_declared_count(path, name, count):
    """Return a count read from the header of *path*, rejecting negatives.

    Raises
    ------
    SurfaceReadError
        If *count* is negative.
    """
    count = int(count)
    if count < 0:
        raise SurfaceReadError(
            f"Invalid {name} count {count} declared in {path!r}."
        )
    return count


class ByteStream:
    """Sequential reader over one surface file.

    Parameters
    ----------
    path : str or os.PathLike
        File to read.
    mode : {'text', 'binary'}
        Initial access mode.
    byteorder : {'>', 'big', '<', 'little'}
        Byte order of binary words.  Ignored in text mode.

    Raises
    ------
    OSError
        If the file cannot be opened.
    ValueError
        If *mode* or *byteorder* is not recognised.

    Notes
    -----
    Use as a context manager so the handle is released on every exit path::

        with ByteStream(path, "binary", ">") as stream:
            magic = stream.read_uint8(3)
    """

    def __init__(self, path, mode="text", byteorder=">"):
        self.path = path
        self.byteorder = normalize_byteorder(byteorder)
        self._fh = None
        self.mode = None
        self._reset_tokens()
        self._open(mode)

    # ------------------------------------------------------------------
    # Handle management
    # ------------------------------------------------------------------

    def _open(self, mode):
        if mode not in _MODES:
            raise ValueError(f"mode must be one of {_MODES}, got {mode!r}.")
        if mode == "text":
            # latin-1 maps every byte to a character, so binary files can be
            # sniffed in text mode without decode errors.
            self._fh = open(self.path, encoding="latin-1", newline="")
        else:
            self._fh = open(self.path, "rb")
        self.mode = mode
        self._reset_tokens()
        logger.debug("Opened %s in %s mode", self.path, mode)

    def reopen(self, mode):
        """Close the file and open it again from the start in *mode*."""
        self.close()
        self._open(mode)

    def close(self):
        """Release the file handle.  Safe to call more than once."""
        if self._fh is not None:
            self._fh.close()
            self._fh = None
        self._reset_tokens()

    @property
    def closed(self):
        """True once the file handle has been released."""
        return self._fh is None

    def tell(self):
        """Position of the underlying handle, in bytes from the file start.

        In text mode this counts characters pulled from the file so far,
        including tokens buffered but not yet consumed.
        """
        if self._fh is None:
            raise ValueError(f"I/O operation on closed stream for {self.path!r}.")
        return self._fh.tell()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def _require(self, mode):
        if self._fh is None:
            raise ValueError(f"I/O operation on closed stream for {self.path!r}.")
        if self.mode != mode:
            raise ValueError(
                f"Operation requires {mode} mode but {self.path!r} is open "
                f"in {self.mode} mode."
            )

    # ------------------------------------------------------------------
    # Text mode
    # ------------------------------------------------------------------

    def peek_char(self):
        """Return the first non-whitespace character of the file.

        Token scanning continues immediately after this character.  Returns
        an empty string for a file holding only whitespace.
        """
        self._require("text")
        while True:
            char = self._fh.read(1)
            if not char or not char.isspace():
                return char

    def _reset_tokens(self):
        self._tokens = []
        self._partial = ""
        self._eof = False

    def _fill_tokens(self, count):
        """Pull chunks from the file until *count* tokens are buffered."""
        while len(self._tokens) < count and not self._eof:
            chunk = self._fh.read(_TEXT_CHUNK)
            if not chunk:
                self._eof = True
                if self._partial:
                    self._tokens.append(self._partial)
                    self._partial = ""
                break
            text = self._partial + chunk
            words = text.split()
            # A token cut by the chunk boundary is completed by the next read.
            if words and not text[-1].isspace():
                self._partial = words.pop()
            else:
                self._partial = ""
            self._tokens.extend(words)

    def _take_tokens(self, count):
        self._fill_tokens(count)
        available = len(self._tokens)
        if available < count:
            raise TruncatedDataError(
                f"Expected {count} more tokens but only {available} remain in "
                f"{self.path!r}."
            )
        chunk = self._tokens[:count]
        del self._tokens[:count]
        return chunk

    def read_floats(self, count):
        """Read the next *count* tokens as a float64 array."""
        self._require("text")
        count = _check_count(count)
        chunk = self._take_tokens(count)
        try:
            return np.array(chunk, dtype=np.float64)
        except ValueError as exc:
            raise SurfaceReadError(
                f"Could not parse numeric tokens in {self.path!r}: {exc}"
            ) from exc

    def read_ints(self, count):
        """Read the next *count* tokens as an int64 array.

        Tokens may be written as decimals (``3.0``); a fractional part is
        an error.
        """
        values = self.read_floats(count)
        ints = values.astype(np.int64)
        if not np.array_equal(ints, values):
            raise SurfaceReadError(
                f"Expected integer tokens in {self.path!r}, got non-integral values."
            )
        return ints

    # ------------------------------------------------------------------
    # Binary mode
    # ------------------------------------------------------------------

    def _read_words(self, code, count):
        self._require("binary")
        count = _check_count(count)
        dtype = np.dtype(code).newbyteorder(self.byteorder)
        n_bytes = dtype.itemsize * count
        # Never allocate more than the file still holds.
        remaining = max(os.fstat(self._fh.fileno()).st_size - self._fh.tell(), 0)
        if n_bytes > remaining:
            raise TruncatedDataError(
                f"Expected {n_bytes} bytes ({count} x {dtype.name}) but only "
                f"{remaining} remain in {self.path!r}."
            )
        buf = self._fh.read(n_bytes)
        if len(buf) < n_bytes:
            raise TruncatedDataError(
                f"Expected {n_bytes} bytes ({count} x {dtype.name}) but only "
                f"{len(buf)} remain in {self.path!r}."
            )
        # Copy to native byte order so callers get ordinary arrays.
        return np.frombuffer(buf, dtype=dtype).astype(dtype.newbyteorder("="))

    def read_uint8(self, count):
        """Read *count* unsigned bytes as a uint8 array."""
        return self._read_words("u1", count)

    def read_int8(self, count):
        """Read *count* signed bytes as an int8 array."""
        return self._read_words("i1", count)

    def read_int32(self, count):
        """Read *count* 32-bit signed integers as an int32 array."""
        return self._read_words("i4", count)

    def read_uint32(self, count):
        """Read *count* 32-bit unsigned integers as a uint32 array."""
        return self._read_words("u4", count)

    def read_float32(self, count):
        """Read *count* 32-bit floats as a float32 array."""
        return self._read_words("f4", count)

    def read_line(self):
        """Read bytes up to and including the next newline.

        Raises
        ------
        TruncatedDataError
            If the file ends before a newline is found.
        """
        self._require("binary")
        line = self._fh.readline()
        if not line.endswith(b"\n"):
            raise TruncatedDataError(
                f"Expected a newline-terminated line in {self.path!r} but the "
                f"file ended."
            )
        return line
