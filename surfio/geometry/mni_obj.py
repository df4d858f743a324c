"""Reader for MNI polygon surface files (``.obj``).

The MNI polygon format exists in an ASCII and a binary encoding that share
one field layout:

1. surface properties (5 values, ignored),
2. vertex count ``V``,
3. ``3V`` coordinates (x, y, z per vertex),
4. ``3V`` normals,
5. triangle count ``T`` and a colour flag; flag ``0`` is followed by one
   RGBA value for the whole surface, any other flag by ``V`` RGBA values,
6. ``T`` end indices (ignored) and ``3T`` zero-based vertex indices.

ASCII files start with the character ``P``.  Binary files start with the
byte ``112`` (``'p'``) and store 32-bit floats / ints in
:data:`OBJ_BINARY_BYTEORDER`, colours as single bytes.

Only the fields up to the requested :class:`~surfio.utils.types.FieldDepth`
are read; the remainder of the file is left untouched.
"""

import logging

import numpy as np

from ..utils.errors import UnrecognizedFormatError
from ..utils.types import FieldDepth, Mesh, ObjEncoding, as_depth
from .byte_stream import ByteStream, check_declared_count
from .sniff import OBJ_ASCII_MARKER, sniff_obj_encoding

logger = logging.getLogger(__name__)

#: Byte order of binary ``.obj`` files.  Never negotiated at run time.
OBJ_BINARY_BYTEORDER = ">"

#: First byte of a binary ``.obj`` file (``ord('p')``).
OBJ_BINARY_MARKER = 112

_N_SURFPROP = 5


def _as_encoding(encoding):
    try:
        return ObjEncoding(encoding)
    except ValueError as exc:
        choices = ", ".join(repr(e.value) for e in ObjEncoding)
        raise ValueError(
            f"encoding must be one of {choices}, got {encoding!r}."
        ) from exc


def _parse_ascii(stream, depth):
    """Read the fields of an ASCII file positioned after the ``P`` marker."""
    fields = {}
    stream.read_floats(_N_SURFPROP)
    n_verts = check_declared_count(stream.path, "vertex", stream.read_ints(1)[0])
    fields["coordinates"] = stream.read_floats(3 * n_verts).reshape(n_verts, 3).astype(np.float32)

    if depth >= FieldDepth.NORMALS:
        fields["normals"] = stream.read_floats(3 * n_verts).reshape(n_verts, 3).astype(np.float32)

    if depth >= FieldDepth.COLOR:
        n_tris = check_declared_count(stream.path, "triangle", stream.read_ints(1)[0])
        color_flag = int(stream.read_ints(1)[0])
        if color_flag == 0:
            fields["color"] = stream.read_floats(4).astype(np.float32)
        else:
            fields["color"] = stream.read_floats(4 * n_verts).reshape(n_verts, 4).astype(np.float32)

        if depth >= FieldDepth.TRIANGLES:
            stream.read_floats(n_tris)
            tris = stream.read_ints(3 * n_tris).reshape(n_tris, 3)
            fields["triangles"] = (tris + 1).astype(np.int32)

    return fields


def _parse_binary(stream, depth):
    """Read the fields of a binary file, starting with the marker byte."""
    marker = int(stream.read_uint8(1)[0])
    if marker != OBJ_BINARY_MARKER:
        raise UnrecognizedFormatError(
            f"Unable to read {stream.path!r}: first byte is {marker} "
            f"({chr(marker)!r}), expected {OBJ_BINARY_MARKER} "
            f"({chr(OBJ_BINARY_MARKER)!r}) for a binary MNI polygon file."
        )

    fields = {}
    stream.read_float32(_N_SURFPROP)
    n_verts = check_declared_count(stream.path, "vertex", stream.read_int32(1)[0])
    fields["coordinates"] = stream.read_float32(3 * n_verts).reshape(n_verts, 3)

    if depth >= FieldDepth.NORMALS:
        fields["normals"] = stream.read_float32(3 * n_verts).reshape(n_verts, 3)

    if depth >= FieldDepth.COLOR:
        n_tris = check_declared_count(stream.path, "triangle", stream.read_int32(1)[0])
        color_flag = int(stream.read_int32(1)[0])
        if color_flag == 0:
            fields["color"] = stream.read_uint8(4)
        else:
            fields["color"] = stream.read_uint8(4 * n_verts).reshape(n_verts, 4)

        if depth >= FieldDepth.TRIANGLES:
            stream.read_int32(n_tris)
            tris = stream.read_int32(3 * n_tris).reshape(n_tris, 3)
            fields["triangles"] = tris + 1

    return fields


def read_mni_obj(path, depth=FieldDepth.TRIANGLES, encoding=ObjEncoding.AUTO,
                 byteorder=OBJ_BINARY_BYTEORDER):
    """Read an MNI polygon surface file.

    Parameters
    ----------
    path : str or os.PathLike
        Path to the ``.obj`` file.
    depth : FieldDepth or int, default=FieldDepth.TRIANGLES
        How many fields to read: 1 coordinates, 2 +normals, 3 +color,
        4 +triangles.
    encoding : ObjEncoding or {'auto', 'ascii', 'binary'}, default='auto'
        ``'auto'`` tries ASCII first (leading ``P``) and otherwise reopens
        the file as binary.  ``'ascii'`` and ``'binary'`` skip the sniffing
        step and commit to one encoding.
    byteorder : {'>', 'big', '<', 'little'}, default='>'
        Byte order of binary files.

    Returns
    -------
    Mesh
        ``coordinates`` and, depending on *depth*, ``normals``, ``color``
        (float32 for ASCII, uint8 for binary) and 1-based ``triangles``.

    Raises
    ------
    OSError
        If the file cannot be opened.
    TruncatedDataError
        If the file ends before the requested fields are complete.
    UnrecognizedFormatError
        If the leading marker matches neither encoding.
    SurfaceReadError
        If an ASCII token is not numeric, or a declared count is negative.
    ValueError
        If *depth*, *encoding* or *byteorder* is invalid, or the parsed
        triangles reference missing vertices.
    """
    depth = as_depth(depth)
    encoding = _as_encoding(encoding)

    if encoding is ObjEncoding.BINARY:
        with ByteStream(path, "binary", byteorder) as stream:
            fields = _parse_binary(stream, depth)
    else:
        with ByteStream(path, "text", byteorder) as stream:
            if encoding is ObjEncoding.ASCII:
                first = stream.peek_char()
                if first != OBJ_ASCII_MARKER:
                    raise UnrecognizedFormatError(
                        f"Unable to read {path!r} as ASCII MNI polygon file: "
                        f"first character is {first!r}, expected "
                        f"{OBJ_ASCII_MARKER!r}."
                    )
                detected = ObjEncoding.ASCII
            else:
                detected = sniff_obj_encoding(stream)

            if detected is ObjEncoding.ASCII:
                fields = _parse_ascii(stream, depth)
            else:
                stream.reopen("binary")
                fields = _parse_binary(stream, depth)
        encoding = detected

    logger.debug(
        "Read %s MNI polygon file %s: %d vertices, fields %s",
        encoding.value, path, fields["coordinates"].shape[0], sorted(fields),
    )
    return Mesh(**fields)
