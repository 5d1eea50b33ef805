import functools
import inspect
from inspect import Parameter, Signature
import os


_EMPTY = (Parameter.empty, Signature.empty)


class TypeCheck(object):
    """Class-based decorator to optionally check the arguments and return value
    of a function against its annotations.

    Supported annotations:
    - types (checked with ``isinstance``)
    - strings, evaluated as if they were the first line of the function body,
      so they can refer to module globals and to the other arguments. A string
      that evaluates to a boolean is the result of the check; one that
      evaluates to a type is checked with ``isinstance``.
    - tuples of the above, which pass if any member passes.

    Checks run whenever ``__debug__`` is set, unless the environment variable
    DISABLE_TYPECHECKING is defined. ``force=True`` checks regardless.
    A failed check raises ``AssertionError``.

    For sample usage, please see tests/utils/test_typecheck.py
    """

    def __init__(self, force=False):
        self._check_types = force
        if "DISABLE_TYPECHECKING" not in os.environ:
            self._check_types = self._check_types or __debug__

    @staticmethod
    def _as_type(annotation):
        """Returns what ``isinstance`` should check against, or None. Aliases
        from ``typing`` such as ``Callable`` check against their origin.
        """
        if isinstance(annotation, type):
            return annotation
        origin = getattr(annotation, "__origin__", None)
        if isinstance(origin, type):
            return origin
        return None

    @staticmethod
    def _is_valid_annotation(annotation):
        if annotation in _EMPTY or isinstance(annotation, str):
            return True
        if TypeCheck._as_type(annotation) is not None:
            return True
        if isinstance(annotation, tuple):
            return all(TypeCheck._is_valid_annotation(a) for a in annotation)
        return False

    def _check_string(self, value, annotation, local_dict):
        try:
            t_eval = eval(annotation, self._func.__globals__, dict(local_dict))
        except Exception as e:
            raise AssertionError(
                f"Evaluating string annotation {{{annotation}}} "
                f"raised the exception: {e}"
            )

        if isinstance(t_eval, bool):
            return t_eval
        if isinstance(t_eval, type):
            return isinstance(value, t_eval)
        return False

    def _check(self, name, value, annotation, local_dict):
        if annotation in _EMPTY:
            return

        annotations = annotation if isinstance(annotation, tuple) else (annotation,)
        strings = [a for a in annotations if isinstance(a, str)]
        types = tuple(
            self._as_type(a) for a in annotations if not isinstance(a, str)
        )

        valid = isinstance(value, types) or any(
            self._check_string(value, s, local_dict) for s in strings
        )
        assert valid, (
            f"Expected {name} to be of type {annotation}, "
            f"but found ({value}) of type ({type(value)})"
        )

    def _wrap_func(self, func):
        self._func = func
        signature = inspect.signature(func)

        for parameter in signature.parameters.values():
            assert self._is_valid_annotation(parameter.annotation), (
                f"Type annotation for {parameter.name} must be a string, type, "
                f"or a tuple of strings and types ({parameter})"
            )
        assert self._is_valid_annotation(signature.return_annotation), (
            f"Return type annotations must be strings, types, or tuples "
            f"of strings or types ({signature.return_annotation})"
        )

        @functools.wraps(func)
        def checked_wrapper(*args, **kwargs):
            bound = signature.bind(*args, **kwargs)
            bound.apply_defaults()

            for arg_name, arg_value in bound.arguments.items():
                self._check(
                    arg_name,
                    arg_value,
                    signature.parameters[arg_name].annotation,
                    bound.arguments,
                )

            return_value = func(*args, **kwargs)
            self._check(
                "return value", return_value, signature.return_annotation, {}
            )
            return return_value

        return checked_wrapper

    def __call__(self, func):
        """Add type checking to ``func`` if enabled."""
        if self._check_types:
            return self._wrap_func(func)

        return func
