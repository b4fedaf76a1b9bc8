from typing import Any, List, Optional, Sequence, Tuple

from rapiddraft.cad_types import Point3D
from rapiddraft.constants import ANGULAR_DEFLECTION, WIRE_CONNECT_TOL
from rapiddraft.curves import LineClass
from rapiddraft.kernel import (
    GeometryKernel,
    KernelCurveType,
    KernelError,
    VisibilityGroups,
)
from rapiddraft.view_basis import ViewBasis

HLR_CURVE_TOLERANCE = 1e-6


def _unwrap(shape):
    # OcpShape keeps the TopoDS_Shape in .obj, cadquery shapes in .wrapped
    shape = getattr(shape, "obj", shape)
    return getattr(shape, "wrapped", shape)


def _xyz(p) -> Point3D:
    return (p.X(), p.Y(), p.Z())


class OcpKernel(GeometryKernel):
    """
    OpenCascade backend through the OCP bindings.

    OCP is imported inside each method so that ``rapiddraft`` can be imported
    without it (the extractors run against any :class:`GeometryKernel`).
    """

    @classmethod
    def is_available(cls) -> bool:
        """Check if the OCP bindings can be imported."""
        try:
            import OCP.HLRBRep  # noqa: F401

            return True
        except ImportError:
            return False

    @classmethod
    def get_name(cls) -> str:
        return "OpenCascade (OCP)"

    def is_null(self, shape: Any) -> bool:
        shape = _unwrap(shape)
        return shape is None or shape.IsNull()

    def count_topology(self, shape: Any) -> Tuple[int, int]:
        from OCP.TopAbs import TopAbs_EDGE, TopAbs_FACE
        from OCP.TopExp import TopExp
        from OCP.TopTools import TopTools_IndexedMapOfShape

        shape = _unwrap(shape)
        faces = TopTools_IndexedMapOfShape()
        edges = TopTools_IndexedMapOfShape()
        TopExp.MapShapes_s(shape, TopAbs_FACE, faces)
        TopExp.MapShapes_s(shape, TopAbs_EDGE, edges)
        return faces.Extent(), edges.Extent()

    def classify_visibility(self, shape: Any, basis: ViewBasis) -> VisibilityGroups:
        from OCP.BRepLib import BRepLib
        from OCP.gp import gp_Ax2, gp_Dir, gp_Pnt
        from OCP.HLRAlgo import HLRAlgo_Projector
        from OCP.HLRBRep import HLRBRep_Algo, HLRBRep_HLRToShape

        shape = _unwrap(shape)
        frame = gp_Ax2(
            gp_Pnt(0, 0, 0),
            gp_Dir(*basis.forward.to_tuple()),
            gp_Dir(*basis.x_axis.to_tuple()),
        )

        hlr = HLRBRep_Algo()
        hlr.Add(shape)
        hlr.Projector(HLRAlgo_Projector(frame))
        hlr.Update()
        hlr.Hide()

        hlr_shapes = HLRBRep_HLRToShape(hlr)
        compounds = {
            LineClass.VISIBLE_SHARP: hlr_shapes.VCompound(),
            LineClass.HIDDEN_SHARP: hlr_shapes.HCompound(),
            LineClass.VISIBLE_SMOOTH: hlr_shapes.Rg1LineVCompound(),
            LineClass.HIDDEN_SMOOTH: hlr_shapes.Rg1LineHCompound(),
            LineClass.VISIBLE_OUTLINE: hlr_shapes.OutLineVCompound(),
            LineClass.HIDDEN_OUTLINE: hlr_shapes.OutLineHCompound(),
        }

        groups: VisibilityGroups = {}
        for line_class, compound in compounds.items():
            if compound.IsNull():
                groups[line_class] = []
                continue
            # HLR output only carries 2D curves
            BRepLib.BuildCurves3d_s(compound, HLR_CURVE_TOLERANCE)
            groups[line_class] = self._edges(compound)
        return groups

    @staticmethod
    def _edges(shape) -> List[Any]:
        from OCP.TopAbs import TopAbs_EDGE
        from OCP.TopExp import TopExp_Explorer
        from OCP.TopoDS import TopoDS

        edges = []
        explorer = TopExp_Explorer(shape, TopAbs_EDGE)
        while explorer.More():
            edges.append(TopoDS.Edge_s(explorer.Current()))
            explorer.Next()
        return edges

    def intersect_with_plane(
        self, shape: Any, origin: Point3D, normal: Point3D
    ) -> Optional[Any]:
        from OCP.BRepAlgoAPI import BRepAlgoAPI_Section
        from OCP.gp import gp_Dir, gp_Pln, gp_Pnt

        shape = _unwrap(shape)
        plane = gp_Pln(gp_Pnt(*origin), gp_Dir(*normal))
        section = BRepAlgoAPI_Section(shape, plane, False)
        section.Build()
        if not section.IsDone():
            raise KernelError("Section operation failed.")

        result = section.Shape()
        if result.IsNull():
            return None
        edges = self._edges(result)
        return edges or None

    def partition_closed_open(self, edges: Any) -> Tuple[List[Any], List[Any]]:
        from OCP.BRep import BRep_Tool
        from OCP.ShapeAnalysis import ShapeAnalysis_FreeBounds
        from OCP.TopoDS import TopoDS
        from OCP.TopTools import TopTools_HSequenceOfShape

        edges_in = TopTools_HSequenceOfShape()
        for edge in edges:
            edges_in.Append(edge)
        wires_out = TopTools_HSequenceOfShape()
        ShapeAnalysis_FreeBounds.ConnectEdgesToWires_s(
            edges_in, WIRE_CONNECT_TOL, False, wires_out
        )

        closed, open_ = [], []
        for i in range(1, wires_out.Length() + 1):
            wire = TopoDS.Wire_s(wires_out.Value(i))
            if BRep_Tool.IsClosed_s(wire):
                closed.append(wire)
            else:
                open_.append(wire)
        return closed, open_

    def wire_points(self, wire: Any) -> List[Point3D]:
        from OCP.BRep import BRep_Tool
        from OCP.BRepTools import BRepTools_WireExplorer

        points = []
        explorer = BRepTools_WireExplorer(wire)
        while explorer.More():
            points.append(_xyz(BRep_Tool.Pnt_s(explorer.CurrentVertex())))
            explorer.Next()
        return points

    def curve_of(self, edge: Any) -> Optional[Tuple[Any, float, float]]:
        from OCP.BRep import BRep_Tool
        from OCP.BRepAdaptor import BRepAdaptor_Curve

        if BRep_Tool.Degenerated_s(edge) or not BRep_Tool.IsGeometric_s(edge):
            return None
        adaptor = BRepAdaptor_Curve(edge)
        return adaptor, adaptor.FirstParameter(), adaptor.LastParameter()

    def curve_type(self, curve: Any) -> KernelCurveType:
        from OCP.GeomAbs import GeomAbs_Circle, GeomAbs_Ellipse, GeomAbs_Line

        curve_type = curve.GetType()
        if curve_type == GeomAbs_Line:
            return KernelCurveType.LINE
        if curve_type == GeomAbs_Circle:
            return KernelCurveType.CIRCLE
        if curve_type == GeomAbs_Ellipse:
            return KernelCurveType.ELLIPSE
        return KernelCurveType.OTHER

    def evaluate(self, curve: Any, parameter: float) -> Point3D:
        return _xyz(curve.Value(parameter))

    def circle_of(self, curve: Any) -> Tuple[Point3D, float]:
        circle = curve.Circle()
        return _xyz(circle.Location()), circle.Radius()

    def ellipse_of(self, curve: Any) -> Tuple[Point3D, float, float, Point3D]:
        ellipse = curve.Ellipse()
        major_dir = ellipse.XAxis().Direction()
        return (
            _xyz(ellipse.Location()),
            ellipse.MajorRadius(),
            ellipse.MinorRadius(),
            _xyz(major_dir),
        )

    def conic_axis(self, curve: Any) -> Point3D:
        from OCP.GeomAbs import GeomAbs_Circle

        if curve.GetType() == GeomAbs_Circle:
            return _xyz(curve.Circle().Axis().Direction())
        return _xyz(curve.Ellipse().Axis().Direction())

    def is_reversed(self, edge: Any) -> bool:
        from OCP.TopAbs import TopAbs_REVERSED

        return edge.Orientation() == TopAbs_REVERSED

    def tessellate(
        self,
        curve: Any,
        first: float,
        last: float,
        chord_tolerance: float,
        angular_tolerance: float = ANGULAR_DEFLECTION,
    ) -> Sequence[Point3D]:
        from OCP.GCPnts import GCPnts_TangentialDeflection

        sampler = GCPnts_TangentialDeflection(
            curve, first, last, angular_tolerance, chord_tolerance
        )
        return [_xyz(sampler.Value(i)) for i in range(1, sampler.NbPoints() + 1)]

    def bounding_box_3d(self, shape: Any) -> Optional[Tuple[Point3D, Point3D]]:
        from OCP.Bnd import Bnd_Box
        from OCP.BRepBndLib import BRepBndLib

        box = Bnd_Box()
        BRepBndLib.Add_s(_unwrap(shape), box)
        if box.IsVoid():
            return None
        xmin, ymin, zmin, xmax, ymax, zmax = box.Get()
        return (xmin, ymin, zmin), (xmax, ymax, zmax)
