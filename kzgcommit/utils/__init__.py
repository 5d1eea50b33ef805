from .typecheck import TypeCheck

__all__ = ["TypeCheck"]
