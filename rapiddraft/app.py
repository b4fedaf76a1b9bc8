from typing import Any, Iterable, List, Optional, Type, Union

from rapiddraft.config import DrawingConfig, HatchConfig
from rapiddraft.hlr import HLRExtractor
from rapiddraft.kernel import GeometryKernel
from rapiddraft.results import ProjectionResult, SectionResult
from rapiddraft.section import SectionExtractor
from rapiddraft.shape import Shape
from rapiddraft.views import STANDARD_VIEWS, CustomView, ProjectionType, SectionPlane


def _native(shape: Any) -> Any:
    return shape.obj if isinstance(shape, Shape) else shape


class App:
    """
    Drawing session: one geometry kernel, one default configuration and the
    shapes registered with it.
    """

    def __init__(
        self,
        kernel: GeometryKernel,
        config: Optional[DrawingConfig] = None,
        shape_class: Type[Shape] = Shape,
    ):
        self.kernel = kernel
        self.config = config or DrawingConfig()
        self.shape_class = shape_class
        self._shapes: List[Shape] = []

    def shape(self, obj: Any) -> Shape:
        """Wrap a native kernel shape and register it with this app."""
        return self.shape_class(obj, self)

    def register_shape(self, shape: Shape) -> None:
        """Register a shape with this app for tracking."""
        if shape not in self._shapes:
            self._shapes.append(shape)

    def get_shapes(self) -> List[Shape]:
        """Get all shapes registered with this app."""
        return self._shapes.copy()

    def shape_count(self) -> int:
        """Get the number of shapes registered with this app."""
        return len(self._shapes)

    def project(
        self,
        shape: Any,
        view: Union[ProjectionType, CustomView] = ProjectionType.FRONT,
        deflection: Optional[float] = None,
        scale: Optional[float] = None,
    ) -> ProjectionResult:
        """
        Hidden-line projection of a shape for a standard or custom view.

        Args:
            shape: Registered :class:`Shape` or native kernel shape
            view: Standard view or :class:`CustomView`
            deflection: Chord tolerance (defaults to the app config)
            scale: Output scale (defaults to the app config)

        Returns:
            ProjectionResult labelled with the view name
        """
        direction, up = view.get_vectors()
        return HLRExtractor(self.kernel).extract(
            _native(shape),
            direction,
            up,
            deflection=self.config.deflection if deflection is None else deflection,
            scale=self.config.scale if scale is None else scale,
            label=view.label,
        )

    def standard_views(self, shape: Any) -> List[ProjectionResult]:
        """Top, front, right and isometric projections."""
        return [self.project(shape, view) for view in STANDARD_VIEWS]

    def section(
        self,
        shape: Any,
        plane: SectionPlane,
        hatch: Optional[HatchConfig] = None,
    ) -> SectionResult:
        return SectionExtractor(self.kernel).extract(
            _native(shape), plane, hatch or self.config.hatch
        )

    def section_view(self, shape: Any, plane: SectionPlane) -> SectionResult:
        """Section outline without hatching."""
        return SectionExtractor(self.kernel).extract(_native(shape), plane, None)

    def horizontal_sections(
        self,
        shape: Any,
        heights: Iterable[float],
        hatch: Optional[HatchConfig] = None,
    ) -> List[SectionResult]:
        return SectionExtractor(self.kernel).horizontal_sections(
            _native(shape), heights, hatch or self.config.hatch
        )
