"""Decide which parser handles a surface file.

The family is chosen from the file name alone: ``.obj`` files are MNI
polygon meshes, everything else (``lh.white``, ``rh.pial``, ...) is treated
as a FreeSurfer surface.  Within the MNI family the leading character
decides between the ASCII and binary encodings.
"""

import os

from ..utils.types import MeshFormat, ObjEncoding

OBJ_EXTENSION = ".obj"
OBJ_ASCII_MARKER = "P"


def detect_format(path):
    """Return the :class:`~surfio.utils.types.MeshFormat` for *path*.

    Parameters
    ----------
    path : str or os.PathLike
        Surface file name.  Only the extension is inspected; the file is
        not opened.

    Returns
    -------
    MeshFormat
        ``MNI_OBJ`` for a ``.obj`` extension (case-insensitive), otherwise
        ``FREESURFER``.
    """
    ext = os.path.splitext(os.fspath(path))[1].lower()
    if ext == OBJ_EXTENSION:
        return MeshFormat.MNI_OBJ
    return MeshFormat.FREESURFER


def sniff_obj_encoding(stream):
    """Return the encoding of an MNI polygon file open in text mode.

    Consumes the leading marker: on ``ASCII`` the stream is positioned at
    the first header token.

    Parameters
    ----------
    stream : ByteStream
        Stream freshly opened in text mode.

    Returns
    -------
    ObjEncoding
        ``ASCII`` when the first non-whitespace character is ``P``,
        otherwise ``BINARY``.
    """
    first = stream.peek_char()
    if first == OBJ_ASCII_MARKER:
        return ObjEncoding.ASCII
    return ObjEncoding.BINARY
