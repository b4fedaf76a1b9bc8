from .dxf import to_dxf
from .svg import to_svg_document, to_svg_path

__all__ = ["to_dxf", "to_svg_document", "to_svg_path"]
