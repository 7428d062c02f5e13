from .diagram_router import router as diagram_router

__all__ = ["diagram_router"]
