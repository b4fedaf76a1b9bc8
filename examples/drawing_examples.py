"""
Example: Drawing views and hatched sections of a part

Builds a plate with a hole in OpenCascade, projects the standard views,
cuts a section through the hole and writes everything to SVG and DXF.
"""

import logging

from OCP.BRepAlgoAPI import BRepAlgoAPI_Cut
from OCP.BRepPrimAPI import BRepPrimAPI_MakeBox, BRepPrimAPI_MakeCylinder
from OCP.gp import gp_Ax2, gp_Dir, gp_Pnt

from rapiddraft import DrawingConfig, HatchConfig, SectionPlane, fit_to_view
from rapiddraft.export import to_dxf, to_svg_document
from rapiddraft.integrations.ocp import OpenCascadeOcpApp


def make_plate_with_hole():
    plate = BRepPrimAPI_MakeBox(gp_Pnt(-20, -15, 0), 40, 30, 8).Shape()
    hole = BRepPrimAPI_MakeCylinder(gp_Ax2(gp_Pnt(0, 0, -1), gp_Dir(0, 0, 1)), 6, 10).Shape()
    cut = BRepAlgoAPI_Cut(plate, hole)
    cut.Build()
    if not cut.IsDone():
        raise RuntimeError("Cut operation failed.")
    return cut.Shape()


def example_standard_views():
    """Project top, front, right and isometric views and save them as SVG."""
    app = OpenCascadeOcpApp(DrawingConfig(deflection=0.05))
    part = app.shape(make_plate_with_hole())

    for result in part.standard_views():
        print(f"{result.label}: {result.num_lines} lines, {result.num_arcs} arcs, "
              f"{result.num_ellipses} ellipses, {result.num_polylines} polylines")
        sheet = fit_to_view(result, 210, 148, margin=10)
        name = result.label.lower().replace(" ", "_")
        with open(f"{name}.svg", "w") as f:
            f.write(to_svg_document(sheet))


def example_section():
    """Cut through the hole and export the hatched section to DXF."""
    app = OpenCascadeOcpApp()
    part = app.shape(make_plate_with_hole())

    section = part.section(SectionPlane.longitudinal(0.0, label="A"), HatchConfig(45.0, 1.5))
    print(f"Section {section.label}: {section.num_regions} regions, "
          f"{section.total_hatch_lines} hatch lines")
    to_dxf(section, "section_a.dxf")


def example_plan_sections():
    """Plan sections at several heights, labelled A, B, C."""
    app = OpenCascadeOcpApp()
    part = app.shape(make_plate_with_hole())
    for section in part.horizontal_sections([2.0, 4.0, 6.0]):
        print(section.to_json())


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    example_standard_views()
    example_section()
    example_plan_sections()
