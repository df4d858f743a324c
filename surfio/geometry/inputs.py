"""Input resolver for surfio mesh loading.

:func:`resolve_mesh` turns anything a caller may hold — a file path, a list
of paths, an existing :class:`~surfio.utils.types.Mesh`, or a pair of
arrays — into a validated :class:`~surfio.utils.types.Mesh`.  Higher-level
code (the CLI) goes through it rather than calling the readers directly.
"""

import os

import numpy as np

from ..utils.types import Mesh
from .mesh_io import DEFAULT_DEPTH, read_mesh


def resolve_mesh(mesh, depth=DEFAULT_DEPTH, **kwargs):
    """Resolve a mesh input to a :class:`~surfio.utils.types.Mesh`.

    Parameters
    ----------
    mesh : str, os.PathLike, list of paths, Mesh, or tuple of two array-likes
        * path — read with :func:`~surfio.geometry.mesh_io.read_mesh`.
        * list or tuple of paths — read and concatenated.
        * ``Mesh`` — returned unchanged.
        * ``(coordinates, triangles)`` tuple — converted to ``float32`` and
          ``int32`` arrays.  Triangles must be **1-based**; pass ``None`` for
          a point cloud without triangles.
    depth : FieldDepth or int, default=FieldDepth.TRIANGLES
        Field depth for file inputs.
    **kwargs
        Forwarded to :func:`~surfio.geometry.mesh_io.read_mesh`
        (``obj_encoding``, ``byteorder``).

    Returns
    -------
    Mesh

    Raises
    ------
    TypeError
        If *mesh* is none of the accepted types.
    ValueError
        If the arrays do not have the expected shapes or triangle indices
        are out of range.
    """
    if isinstance(mesh, Mesh):
        return mesh
    if isinstance(mesh, (str, os.PathLike)):
        return read_mesh(mesh, depth, **kwargs)
    if (isinstance(mesh, (list, tuple)) and mesh
            and all(isinstance(p, (str, os.PathLike)) for p in mesh)):
        return read_mesh(mesh, depth, **kwargs)
    if isinstance(mesh, tuple) and len(mesh) == 2:
        coords = np.asarray(mesh[0], dtype=np.float32)
        tris = None if mesh[1] is None else np.asarray(mesh[1], dtype=np.int32)
        return Mesh(coordinates=coords, triangles=tris)
    raise TypeError(
        f"mesh must be a file path, a list of file paths, a Mesh, or a "
        f"(coordinates, triangles) tuple, got {type(mesh).__name__!r}."
    )
