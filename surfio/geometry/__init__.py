"""Geometry subpackage — surface readers, concatenation and input resolution.

Architecture
------------
The subpackage has three layers:

**Layer 1 — low-level access and format readers**:

* :mod:`~surfio.geometry.byte_stream` — :class:`ByteStream`, text-token and
  fixed-width binary reads over one file handle.
* :mod:`~surfio.geometry.sniff` — :func:`detect_format` (by extension) and
  :func:`sniff_obj_encoding` (ASCII vs binary ``.obj``).
* :mod:`~surfio.geometry.mni_obj` — MNI polygon files (``read_mni_obj``).
* :mod:`~surfio.geometry.freesurfer_io` — FreeSurfer triangle surfaces
  (``read_freesurfer_surface``).

**Layer 2 — combination and dispatch**:

* :mod:`~surfio.geometry.concat` — :func:`concatenate_meshes`.
* :mod:`~surfio.geometry.mesh_io` — :func:`read_mesh`, one file or several
  concatenated.

**Layer 3 — resolver** (:mod:`~surfio.geometry.inputs`):

``resolve_mesh`` accepts a path, paths, a ``Mesh`` or arrays and returns a
validated ``Mesh``.
"""
from .byte_stream import ByteStream
from .concat import concatenate_meshes
from .freesurfer_io import TRIANGLE_MAGIC, read_freesurfer_surface
from .inputs import resolve_mesh
from .mesh_io import read_mesh, read_surface
from .mni_obj import OBJ_BINARY_BYTEORDER, OBJ_BINARY_MARKER, read_mni_obj
from .sniff import detect_format, sniff_obj_encoding

__all__ = [
    # Layer 3 — resolver
    'resolve_mesh',
    # Layer 2 — dispatch and concatenation
    'read_mesh',
    'read_surface',
    'concatenate_meshes',
    # Layer 1 — readers
    'read_mni_obj',
    'read_freesurfer_surface',
    'detect_format',
    'sniff_obj_encoding',
    'ByteStream',
    # Constants
    'OBJ_BINARY_BYTEORDER',
    'OBJ_BINARY_MARKER',
    'TRIANGLE_MAGIC',
]
