"""surfio: read MNI polygon and FreeSurfer brain surfaces into one mesh type.

surfio parses two surface file families:

- **MNI polygon** (``.obj``), ASCII or binary, with optional normals,
  constant or per-vertex colour, and triangles
- **FreeSurfer** binary triangle surfaces (``lh.white``, ``rh.pial``, ...)

Both are returned as a :class:`~surfio.utils.types.Mesh`.  Several files can
be read at once and are concatenated with renumbered triangles.  Triangle
indices are **1-based**.

Reading a surface::

    from surfio import read_mesh

    mesh = read_mesh('path/to/lh.white')
    mesh.coordinates.shape   # (V, 3)
    mesh.triangles.min()     # 1

Reading only the coordinates of both hemispheres::

    from surfio import FieldDepth, read_mesh

    mesh = read_mesh(['lh.obj', 'rh.obj'], depth=FieldDepth.COORDINATES)

From the command line::

    surfinfo lh.white rh.white

"""

from ._config import sys_info  # noqa: F401
from ._version import __version__  # noqa: F401
from .geometry import concatenate_meshes, read_mesh, resolve_mesh
from .utils.errors import SurfaceReadError, TruncatedDataError, UnrecognizedFormatError
from .utils.types import FieldDepth, Mesh, ObjEncoding

__all__ = [
    "__version__",
    "sys_info",
    "read_mesh",
    "concatenate_meshes",
    "resolve_mesh",
    "Mesh",
    "FieldDepth",
    "ObjEncoding",
    "SurfaceReadError",
    "TruncatedDataError",
    "UnrecognizedFormatError",
]
