from .controller import EditorController

__all__ = ["EditorController"]
