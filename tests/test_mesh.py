from pob_runtime.geometry import Point, Quad, Rect, Size
from pob_runtime.mesh import ClippedMesh, Mesh, Vertex
from pob_runtime.primitives import DEFAULT_TEXTURE_ID

WHITE = (255, 255, 255, 255)
RED = (255, 0, 0, 255)


def _rect(x0, y0, x1, y1):
    return Rect(Point(x0, y0), Point(x1, y1))


def test_new_mesh_is_empty_with_default_texture():
    mesh = Mesh()
    assert mesh.is_empty()
    assert mesh.texture_id == DEFAULT_TEXTURE_ID


def test_add_rect_indices_form_two_triangles():
    mesh = Mesh()
    mesh.add_rect(_rect(0, 0, 10, 20), _rect(0, 0, 1, 1), WHITE, 0)
    assert mesh.indices == [0, 1, 3, 1, 2, 3]
    assert not mesh.is_empty()


def test_add_rect_vertex_corners_in_order():
    rect = _rect(1, 2, 11, 22)
    uv = _rect(0.0, 0.5, 0.25, 0.75)
    mesh = Mesh()
    mesh.add_rect(rect, uv, RED, 3)
    assert [v.pos for v in mesh.vertices] == [
        rect.top_left(),
        rect.top_right(),
        rect.bottom_right(),
        rect.bottom_left(),
    ]
    assert [v.uv for v in mesh.vertices] == [
        uv.top_left(),
        uv.top_right(),
        uv.bottom_right(),
        uv.bottom_left(),
    ]
    assert all(v.color == RED and v.layer_idx == 3 for v in mesh.vertices)


def test_second_shape_indices_are_offset_by_vertex_count():
    mesh = Mesh()
    mesh.add_rect(_rect(0, 0, 1, 1), _rect(0, 0, 1, 1), WHITE, 0)
    mesh.add_quad(Quad.from_size(Size(2, 2)), Quad.from_size(Size(1, 1)), WHITE, 0)
    first, second = mesh.indices[:6], mesh.indices[6:]
    assert second == [index + 4 for index in first]
    assert len(mesh.vertices) == 8
    assert max(mesh.indices) == len(mesh.vertices) - 1


def test_add_quad_keeps_point_order():
    quad = Quad(Point(0, 0), Point(5, 1), Point(6, 7), Point(-1, 4))
    uv = Quad.from_size(Size(1, 1))
    mesh = Mesh()
    mesh.add_quad(quad, uv, WHITE, 2)
    assert [v.pos for v in mesh.vertices] == [quad.p0, quad.p1, quad.p2, quad.p3]
    assert [v.uv for v in mesh.vertices] == [uv.p0, uv.p1, uv.p2, uv.p3]
    assert mesh.vertices[0] == Vertex(quad.p0, uv.p0, WHITE, 2)


def test_clipped_mesh_holds_clip_rect_and_mesh():
    mesh = Mesh(texture_id=7)
    clip = _rect(0, 0, 100, 100)
    clipped = ClippedMesh(clip, mesh)
    assert clipped.clip_rect == clip
    assert clipped.mesh.texture_id == 7