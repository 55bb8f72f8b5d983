from versionfusion.fusion.engine import FusionEngine
from versionfusion.fusion.engine_factory import create_fusion_engine

__all__ = ["FusionEngine", "create_fusion_engine"]
