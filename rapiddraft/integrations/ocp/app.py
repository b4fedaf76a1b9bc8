from typing import Optional

from rapiddraft.app import App
from rapiddraft.config import DrawingConfig
from rapiddraft.integrations.ocp.kernel import OcpKernel


class OpenCascadeOcpApp(App):
    def __init__(self, config: Optional[DrawingConfig] = None):
        from rapiddraft.integrations.ocp.shape import OcpShape

        if not OcpKernel.is_available():
            import warnings

            warnings.warn(
                "OCP bindings not available, drawing calls will fail. "
                "Install with: pip install cadquery-ocp"
            )
        super().__init__(OcpKernel(), config, OcpShape)
