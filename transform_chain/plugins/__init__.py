from .loader import ENTRY_POINT_GROUP, TransformLoader, build_chain

__all__ = ["ENTRY_POINT_GROUP", "TransformLoader", "build_chain"]
