from rapiddraft.shape import Shape


class OcpShape(Shape):
    """Shape handle holding a bare ``TopoDS_Shape``."""

    def __init__(self, obj, app) -> None:
        # cadquery objects carry the TopoDS_Shape in .wrapped
        super().__init__(getattr(obj, "wrapped", obj), app)
