"""Public surface reader: one file or several concatenated.

:func:`read_mesh` is the entry point for reading surfaces from disk.  It
routes each file name to the MNI polygon reader (``.obj``) or the FreeSurfer
reader (any other name) and, when given several names, concatenates the
results into a single :class:`~surfio.utils.types.Mesh`.
"""

import logging
import os

from ..utils.types import FieldDepth, MeshFormat, ObjEncoding, as_depth
from .concat import concatenate_meshes
from .freesurfer_io import read_freesurfer_surface
from .mni_obj import OBJ_BINARY_BYTEORDER, read_mni_obj
from .sniff import detect_format

logger = logging.getLogger(__name__)

DEFAULT_DEPTH = FieldDepth.TRIANGLES


def _read_obj(path, depth, obj_encoding, byteorder):
    return read_mni_obj(path, depth, encoding=obj_encoding, byteorder=byteorder)


def _read_freesurfer(path, depth, obj_encoding, byteorder):
    return read_freesurfer_surface(path, depth)


_READERS = {
    MeshFormat.MNI_OBJ: _read_obj,
    MeshFormat.FREESURFER: _read_freesurfer,
}


def _is_path(obj):
    return isinstance(obj, (str, os.PathLike))


def read_surface(path, depth=DEFAULT_DEPTH, *, obj_encoding=ObjEncoding.AUTO,
                 byteorder=OBJ_BINARY_BYTEORDER):
    """Read a single surface file.

    Parameters
    ----------
    path : str or os.PathLike
        Surface file.  ``.obj`` (any case) is read as MNI polygon, any other
        name as FreeSurfer surface.
    depth : FieldDepth or int, default=FieldDepth.TRIANGLES
        Number of fields to read.
    obj_encoding : ObjEncoding or str, default='auto'
        Encoding of ``.obj`` files; see :func:`read_mni_obj`.
    byteorder : str, default='>'
        Byte order of binary ``.obj`` files.

    Returns
    -------
    Mesh
    """
    fmt = detect_format(path)
    logger.debug("Reading %s as %s", path, fmt.name)
    return _READERS[fmt](path, depth, obj_encoding, byteorder)


def read_mesh(mesh, depth=DEFAULT_DEPTH, *, obj_encoding=ObjEncoding.AUTO,
              byteorder=OBJ_BINARY_BYTEORDER):
    """Read a surface, or several surfaces concatenated into one.

    Parameters
    ----------
    mesh : str, os.PathLike, or list/tuple of them
        A single surface file, or an ordered collection of surface files
        whose meshes are concatenated (vertices in file order, triangle
        indices renumbered).
    depth : FieldDepth or int, default=FieldDepth.TRIANGLES
        Number of fields to read: 1 coordinates, 2 +normals, 3 +color,
        4 +triangles.  Normals and colour only exist in MNI ``.obj`` files.
    obj_encoding : ObjEncoding or {'auto', 'ascii', 'binary'}, default='auto'
        Encoding of ``.obj`` files.  Use ``'ascii'`` or ``'binary'`` to
        override detection.
    byteorder : {'>', 'big', '<', 'little'}, default='>'
        Byte order of binary ``.obj`` files.

    Returns
    -------
    Mesh

    Raises
    ------
    TypeError
        If *mesh* is neither a path nor a list/tuple of paths.
    ValueError
        If *mesh* is an empty collection or *depth* is invalid.
    OSError, TruncatedDataError, UnrecognizedFormatError
        Propagated unchanged from the first file that fails; no partial
        concatenation is returned.
    """
    depth = as_depth(depth)

    if _is_path(mesh):
        return read_surface(mesh, depth, obj_encoding=obj_encoding, byteorder=byteorder)

    if not isinstance(mesh, (list, tuple)) or not all(_is_path(p) for p in mesh):
        raise TypeError(
            f"mesh must be a file path or a list/tuple of file paths, "
            f"got {type(mesh).__name__!r}."
        )
    if not mesh:
        raise ValueError("mesh is an empty list; at least one surface file is required.")

    meshes = [
        read_surface(path, depth, obj_encoding=obj_encoding, byteorder=byteorder)
        for path in mesh
    ]
    return concatenate_meshes(meshes)
