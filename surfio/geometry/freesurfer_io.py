"""Reader for FreeSurfer binary triangle surfaces (``lh.white``, ``rh.pial``, ...).

Layout (all big-endian)::

    3 bytes   magic number 0xFFFFFE
    text      "created by <user> on <date>\\n" followed by a second line
    int32     number of vertices V
    int32     number of triangles T
    float32   3V vertex coordinates
    int32     3T zero-based vertex indices

Quad surfaces and other magic numbers are rejected.
"""

import logging

from ..utils.errors import UnrecognizedFormatError
from ..utils.types import FieldDepth, Mesh, as_depth
from .byte_stream import ByteStream, check_declared_count

logger = logging.getLogger(__name__)

#: Magic number of a FreeSurfer triangle surface file.
TRIANGLE_MAGIC = 16777214

FREESURFER_BYTEORDER = ">"


def _fread3(stream):
    """Compose a 24-bit big-endian integer from the next three bytes."""
    b1, b2, b3 = (int(b) for b in stream.read_uint8(3))
    return (b1 << 16) + (b2 << 8) + b3


def read_freesurfer_surface(path, depth=FieldDepth.TRIANGLES):
    """Read a FreeSurfer triangle surface file.

    Parameters
    ----------
    path : str or os.PathLike
        Path to the surface file.
    depth : FieldDepth or int, default=FieldDepth.TRIANGLES
        The triangle list is read only at full depth (4).  FreeSurfer
        surfaces carry no normals or colours, so depths 1 to 3 all return
        coordinates only.

    Returns
    -------
    Mesh
        ``coordinates`` (float32, shape (V, 3)) and, at full depth,
        1-based ``triangles`` (int32, shape (T, 3)).

    Raises
    ------
    OSError
        If the file cannot be opened.
    UnrecognizedFormatError
        If the magic number is not :data:`TRIANGLE_MAGIC`.
    TruncatedDataError
        If the file ends before the declared arrays are complete.
    SurfaceReadError
        If the header declares a negative vertex or triangle count.
    """
    depth = as_depth(depth)
    with ByteStream(path, "binary", FREESURFER_BYTEORDER) as stream:
        magic = _fread3(stream)
        if magic != TRIANGLE_MAGIC:
            raise UnrecognizedFormatError(
                f"Unable to read {path!r} as FreeSurfer surface: magic = {magic}, "
                f"expected {TRIANGLE_MAGIC}."
            )
        comment = stream.read_line().decode("latin-1").strip()
        stream.read_line()
        logger.debug("FreeSurfer surface %s header: %s", path, comment)

        n_verts = check_declared_count(path, "vertex", stream.read_int32(1)[0])
        n_tris = check_declared_count(path, "triangle", stream.read_int32(1)[0])
        coords = stream.read_float32(3 * n_verts).reshape(n_verts, 3)

        tris = None
        if depth == FieldDepth.TRIANGLES:
            tris = stream.read_int32(3 * n_tris).reshape(n_tris, 3) + 1

    logger.debug(
        "Read FreeSurfer surface %s: %d vertices, %d triangles%s",
        path, n_verts, n_tris, "" if tris is not None else " (not loaded)",
    )
    return Mesh(coordinates=coords, triangles=tris)
