"""Tests for surfio/geometry/freesurfer_io.py.

Fixtures are written with nibabel's FreeSurfer writer and the results are
cross-checked against nibabel's reader.
"""

import os
import tempfile

import numpy as np
import pytest

from surfio.geometry.freesurfer_io import TRIANGLE_MAGIC, read_freesurfer_surface
from surfio.utils.errors import SurfaceReadError, TruncatedDataError, UnrecognizedFormatError

_V = np.array([[0, 0, 0], [1, 0, 0], [0, 1, 0], [0, 0, 1]], dtype=np.float32)
_F = np.array([[0, 2, 1], [0, 1, 3], [0, 3, 2], [1, 2, 3]], dtype=np.int32)


def _tmp_path(suffix=""):
    fd, path = tempfile.mkstemp(prefix="lh.", suffix=suffix)
    os.close(fd)
    return path


def _write_nibabel_surface(verts=_V, faces=_F):
    import nibabel.freesurfer as fs
    path = _tmp_path()
    fs.write_geometry(path, verts, faces, create_stamp="created by surfio tests")
    return path


def _fs_bytes(verts=_V, faces=_F, magic=TRIANGLE_MAGIC, header=b"created by hand\n\n"):
    """Return the bytes of a FreeSurfer triangle surface."""
    return b"".join([
        bytes([(magic >> 16) & 255, (magic >> 8) & 255, magic & 255]),
        header,
        np.array([len(verts), len(faces)], dtype=">i4").tobytes(),
        np.asarray(verts, dtype=">f4").tobytes(),
        np.asarray(faces, dtype=">i4").tobytes(),
    ])


def _write_tmp(content):
    path = _tmp_path()
    with open(path, "wb") as fh:
        fh.write(content)
    return path


class TestReadFreesurferSurface:
    def test_matches_nibabel(self):
        import nibabel.freesurfer as fs
        path = _write_nibabel_surface()
        try:
            mesh = read_freesurfer_surface(path)
            nib_verts, nib_faces = fs.read_geometry(path)
        finally:
            os.unlink(path)
        assert mesh.coordinates.dtype == np.float32
        assert mesh.triangles.dtype == np.int32
        np.testing.assert_allclose(mesh.coordinates, nib_verts, atol=1e-6)
        np.testing.assert_array_equal(mesh.triangles, nib_faces + 1)

    def test_hand_written_layout(self):
        path = _write_tmp(_fs_bytes())
        try:
            mesh = read_freesurfer_surface(path)
        finally:
            os.unlink(path)
        np.testing.assert_array_equal(mesh.coordinates, _V)
        np.testing.assert_array_equal(mesh.triangles, _F + 1)

    def test_no_normals_or_color(self):
        path = _write_nibabel_surface()
        try:
            mesh = read_freesurfer_surface(path)
        finally:
            os.unlink(path)
        assert mesh.normals is None
        assert mesh.color is None
        assert mesh.fields == ("coordinates", "triangles")

    @pytest.mark.parametrize("depth", [1, 2, 3])
    def test_triangles_only_at_full_depth(self, depth):
        path = _write_nibabel_surface()
        try:
            mesh = read_freesurfer_surface(path, depth=depth)
        finally:
            os.unlink(path)
        assert mesh.triangles is None
        assert mesh.n_vertices == 4

    def test_partial_depth_ignores_missing_triangles(self):
        content = _fs_bytes()[: -4 * _F.size]
        path = _write_tmp(content)
        try:
            assert read_freesurfer_surface(path, depth=1).n_vertices == 4
            with pytest.raises(TruncatedDataError):
                read_freesurfer_surface(path)
        finally:
            os.unlink(path)

    def test_bad_magic_raises(self):
        path = _write_tmp(b"\x00\x01\x02" + b"rest of file\n\n")
        try:
            with pytest.raises(UnrecognizedFormatError, match="magic = 258"):
                read_freesurfer_surface(path)
        finally:
            os.unlink(path)

    def test_quad_magic_rejected(self):
        path = _write_tmp(_fs_bytes(magic=16777215))
        try:
            with pytest.raises(UnrecognizedFormatError, match="16777215"):
                read_freesurfer_surface(path)
        finally:
            os.unlink(path)

    def test_missing_comment_newline_raises(self):
        path = _write_tmp(_fs_bytes()[:3] + b"created by nobody")
        try:
            with pytest.raises(TruncatedDataError):
                read_freesurfer_surface(path)
        finally:
            os.unlink(path)

    def test_truncated_coordinates_raises(self):
        content = _fs_bytes()[: 3 + len(b"created by hand\n\n") + 8 + 10]
        path = _write_tmp(content)
        try:
            with pytest.raises(TruncatedDataError):
                read_freesurfer_surface(path, depth=1)
        finally:
            os.unlink(path)

    def test_too_short_for_magic_raises(self):
        path = _write_tmp(b"\xff")
        try:
            with pytest.raises(TruncatedDataError):
                read_freesurfer_surface(path)
        finally:
            os.unlink(path)

    def test_huge_vertex_count_raises_truncated(self):
        header = _fs_bytes()[:3] + b"c\n\n"
        path = _write_tmp(header + np.array([2**31 - 1, 1], dtype=">i4").tobytes())
        try:
            with pytest.raises(TruncatedDataError, match="but only 0 remain"):
                read_freesurfer_surface(path, depth=1)
        finally:
            os.unlink(path)

    @pytest.mark.parametrize("counts, name", [([-4, 4], "vertex"), ([4, -1], "triangle")])
    def test_negative_count_raises(self, counts, name):
        header = _fs_bytes()[:3] + b"c\n\n"
        path = _write_tmp(header + np.array(counts, dtype=">i4").tobytes())
        try:
            with pytest.raises(SurfaceReadError, match=f"Invalid {name} count"):
                read_freesurfer_surface(path)
        finally:
            os.unlink(path)

    def test_missing_file_raises(self):
        with pytest.raises(OSError):
            read_freesurfer_surface("/nonexistent/dir/lh.white")
