from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple, Union

from rapiddraft.cad_types import Point3D

if TYPE_CHECKING:
    from rapiddraft.app import App
    from rapiddraft.config import HatchConfig
    from rapiddraft.results import ProjectionResult, SectionResult
    from rapiddraft.views import CustomView, ProjectionType, SectionPlane


class Shape:
    """
    A kernel shape handle registered with an :class:`App`.

    ``obj`` is the backend's native shape (a ``TopoDS_Shape`` for OCP).
    """

    def __init__(self, obj, app: Optional["App"]) -> None:
        self.obj = obj
        self.app = app
        if app is not None:
            app.register_shape(self)

    def _require_app(self) -> "App":
        if self.app is None:
            raise ValueError("Shape is not registered with an App")
        return self.app

    def bounding_box(self) -> Optional[Tuple[Point3D, Point3D]]:
        return self._require_app().kernel.bounding_box_3d(self.obj)

    def topology_counts(self) -> Tuple[int, int]:
        """Return ``(faces, edges)``."""
        return self._require_app().kernel.count_topology(self.obj)

    def project(
        self,
        view: Union["ProjectionType", "CustomView"],
        deflection: Optional[float] = None,
        scale: Optional[float] = None,
    ) -> "ProjectionResult":
        return self._require_app().project(self, view, deflection, scale)

    def section(
        self, plane: "SectionPlane", hatch: Optional["HatchConfig"] = None
    ) -> "SectionResult":
        return self._require_app().section(self, plane, hatch)

    def section_view(self, plane: "SectionPlane") -> "SectionResult":
        return self._require_app().section_view(self, plane)

    def standard_views(self) -> List["ProjectionResult"]:
        return self._require_app().standard_views(self)

    def horizontal_sections(
        self, heights: Iterable[float], hatch: Optional["HatchConfig"] = None
    ) -> List["SectionResult"]:
        return self._require_app().horizontal_sections(self, heights, hatch)
