"""Merge several surfaces into one mesh with renumbered triangles."""

import logging

import numpy as np

from ..utils.types import Mesh

logger = logging.getLogger(__name__)


def _merge_colors(meshes):
    """Combine the ``color`` fields of *meshes*.

    A constant colour on the first mesh wins outright.  Otherwise colours
    are appended in order, except that a constant colour on a later mesh
    replaces everything accumulated before it, and per-vertex colours after
    such a constant start a new accumulation.
    """
    first = meshes[0]
    if first.has_constant_color:
        return first.color.copy()

    merged = None
    for mesh in meshes:
        if mesh.color is None:
            continue
        if mesh.has_constant_color or merged is None:
            merged = mesh.color.copy()
        elif merged.ndim == 1:
            # Per-vertex colours cannot extend a single RGBA value.
            logger.warning(
                "Per-vertex colour follows a constant colour; restarting the "
                "colour accumulation."
            )
            merged = mesh.color.copy()
        else:
            if merged.dtype != mesh.color.dtype:
                logger.warning(
                    "Merging %s and %s colours without rescaling.",
                    merged.dtype, mesh.color.dtype,
                )
            merged = np.concatenate([merged, mesh.color]).astype(
                np.result_type(merged, mesh.color)
            )
    return merged


def concatenate_meshes(meshes):
    """Concatenate surfaces into a single :class:`~surfio.utils.types.Mesh`.

    Parameters
    ----------
    meshes : sequence of Mesh
        Surfaces in the order their vertices should appear.

    Returns
    -------
    Mesh
        * ``coordinates`` — all vertices, in input order.
        * ``triangles`` — all triangles; those of the i-th mesh are shifted
          by the number of vertices in the meshes before it.  ``None`` if no
          input has triangles.
        * ``normals`` — normals of the inputs that have them.
        * ``color`` — the first mesh's colour if it is constant, otherwise
          the colours of the inputs appended in order (a later constant
          colour replaces what came before).

        A merged ``normals`` or per-vertex ``color`` that does not cover
        every vertex is dropped with a warning.

    Raises
    ------
    ValueError
        If *meshes* is empty.
    """
    meshes = list(meshes)
    if not meshes:
        raise ValueError("Cannot concatenate an empty sequence of meshes.")

    coords = []
    tris = []
    normals = []
    offset = 0
    for mesh in meshes:
        coords.append(mesh.coordinates)
        if mesh.triangles is not None:
            tris.append(mesh.triangles.astype(np.int32) + offset)
        if mesh.normals is not None:
            normals.append(mesh.normals)
        offset += mesh.n_vertices

    merged_coords = np.concatenate(coords).astype(np.float32)
    n_verts = merged_coords.shape[0]
    merged_tris = np.concatenate(tris) if tris else None

    merged_normals = np.concatenate(normals) if normals else None
    if merged_normals is not None and merged_normals.shape[0] == 0:
        merged_normals = None
    if merged_normals is not None and merged_normals.shape[0] != n_verts:
        logger.warning(
            "Dropping normals: %d of %d merged vertices have normals.",
            merged_normals.shape[0], n_verts,
        )
        merged_normals = None

    merged_color = _merge_colors(meshes)
    if merged_color is not None and merged_color.ndim == 2 and merged_color.shape[0] != n_verts:
        logger.warning(
            "Dropping color: %d of %d merged vertices have colours.",
            merged_color.shape[0], n_verts,
        )
        merged_color = None

    logger.debug(
        "Concatenated %d meshes: %d vertices, %d triangles",
        len(meshes), n_verts, 0 if merged_tris is None else merged_tris.shape[0],
    )
    return Mesh(
        coordinates=merged_coords,
        normals=merged_normals,
        color=merged_color,
        triangles=merged_tris,
    )
