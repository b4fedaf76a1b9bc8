from .app import OpenCascadeOcpApp
from .kernel import OcpKernel
from .shape import OcpShape

__all__ = ["OcpKernel", "OcpShape", "OpenCascadeOcpApp"]
