"""Contains the types used in surfio.

This module defines the in-memory surface representation shared by every
reader, and small enumeration types used to steer the readers.

Classes
-------
FieldDepth
    How many of {coordinates, normals, color, triangles} a reader parses.
MeshFormat
    File family chosen by the format sniffer.
ObjEncoding
    Encoding of an MNI ``.obj`` file (auto-detected or forced).
Mesh
    Immutable triangulated surface with optional per-vertex fields.

Functions
---------
as_depth
    Validate a user-supplied depth and return the :class:`FieldDepth`.
"""

import enum
from dataclasses import dataclass

import numpy as np


class FieldDepth(enum.IntEnum):
    """Number of mesh fields to parse, in file order.

    Attributes
    ----------
    COORDINATES : int
        Vertex coordinates only.
    NORMALS : int
        Coordinates and per-vertex normals.
    COLOR : int
        Coordinates, normals and color.
    TRIANGLES : int
        Everything, including the triangle list.
    """
    COORDINATES = 1
    NORMALS = 2
    COLOR = 3
    TRIANGLES = 4


class MeshFormat(enum.Enum):
    """Surface file family."""
    MNI_OBJ = 1
    FREESURFER = 2


class ObjEncoding(enum.Enum):
    """Encoding of an MNI polygon file.

    ``AUTO`` sniffs the leading marker; ``ASCII`` and ``BINARY`` commit to
    one mode without sniffing.
    """
    AUTO = "auto"
    ASCII = "ascii"
    BINARY = "binary"


def as_depth(depth):
    """Return *depth* as a :class:`FieldDepth`.

    Parameters
    ----------
    depth : FieldDepth or int
        Requested field depth, 1 to 4.

    Returns
    -------
    FieldDepth

    Raises
    ------
    ValueError
        If *depth* is not an integer between 1 and 4.
    """
    if isinstance(depth, bool) or not isinstance(depth, (int, np.integer)):
        raise ValueError(
            f"depth must be an integer between 1 and 4, got {depth!r}."
        )
    try:
        return FieldDepth(int(depth))
    except ValueError as exc:
        raise ValueError(
            f"depth must be an integer between 1 and 4, got {depth!r}."
        ) from exc


@dataclass(frozen=True, eq=False)
class Mesh:
    """Triangulated surface read from an MNI ``.obj`` or FreeSurfer file.

    Attributes
    ----------
    coordinates : numpy.ndarray, shape (V, 3), dtype float32
        Vertex coordinates.
    normals : numpy.ndarray, shape (V, 3), dtype float32, or None
        Per-vertex normals (MNI ``.obj`` only).
    color : numpy.ndarray or None
        Either one RGBA value, shape ``(4,)``, for the whole surface, or one
        per vertex, shape ``(V, 4)``.  ``uint8`` in [0, 255] when read from a
        binary file, ``float32`` in [0, 1] when read from an ASCII file
        (MNI ``.obj`` only).
    triangles : numpy.ndarray, shape (T, 3), dtype int32, or None
        Vertex indices of each triangle, **1-based**.

    Raises
    ------
    ValueError
        If the arrays do not have consistent shapes or a triangle index is
        outside ``[1, V]``.
    """
    coordinates: np.ndarray
    normals: np.ndarray | None = None
    color: np.ndarray | None = None
    triangles: np.ndarray | None = None

    def __post_init__(self):
        coords = self.coordinates
        if coords is None or coords.ndim != 2 or coords.shape[1] != 3:
            shape = None if coords is None else coords.shape
            raise ValueError(
                f"coordinates must be an array of shape (V, 3), got shape {shape}."
            )
        n_verts = coords.shape[0]

        if self.normals is not None and self.normals.shape != (n_verts, 3):
            raise ValueError(
                f"normals have shape {self.normals.shape} but mesh has "
                f"{n_verts} vertices."
            )

        if self.color is not None and self.color.shape not in ((4,), (n_verts, 4)):
            raise ValueError(
                f"color must have shape (4,) or ({n_verts}, 4), "
                f"got shape {self.color.shape}."
            )

        tris = self.triangles
        if tris is not None:
            if tris.ndim != 2 or tris.shape[1] != 3:
                raise ValueError(
                    f"triangles must be an array of shape (T, 3), got shape {tris.shape}."
                )
            if tris.size > 0 and (int(tris.min()) < 1 or int(tris.max()) > n_verts):
                raise ValueError(
                    f"Triangle indices out of range [1, {n_verts}]: "
                    f"min={int(tris.min())}, max={int(tris.max())}."
                )

    @property
    def n_vertices(self):
        """Number of vertices."""
        return self.coordinates.shape[0]

    @property
    def n_triangles(self):
        """Number of triangles, 0 when the triangle list was not read."""
        return 0 if self.triangles is None else self.triangles.shape[0]

    @property
    def has_constant_color(self):
        """True when the mesh carries a single RGBA value."""
        return self.color is not None and self.color.ndim == 1

    @property
    def fields(self):
        """Names of the fields present on this mesh, in file order."""
        names = ("coordinates", "normals", "color", "triangles")
        return tuple(name for name in names if getattr(self, name) is not None)
