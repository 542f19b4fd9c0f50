"""Provide insights about Python objects."""

import inspect
from typing import Any


def get_qualname(obj: Any) -> str:
    """Get the qualified name of the given object.

    Used to give a readable name to the functions
    that Series transforms apply.

    For functions or methods, this will return
    something like `module.class.method` or
    `module.function`, for callable objects their
    string representation is used when they provide one.

    >>> from numframe.compute.functions import signum
    >>> get_qualname(signum)
    'numframe.compute.functions.signum'
    """
    if inspect.ismethod(obj) or inspect.isfunction(obj):
        module = inspect.getmodule(obj)
        module_name = module.__name__ if module is not None else "<unknown>"
        if hasattr(obj, "__self__") and obj.__self__:
            class_name = obj.__self__.__class__.__name__
            return f"{module_name}.{class_name}.{obj.__name__}"
        return f"{module_name}.{obj.__qualname__}"
    elif inspect.isclass(obj):
        return f"{obj.__module__}.{obj.__name__}"
    elif inspect.ismodule(obj):
        return obj.__name__
    elif type(obj).__str__ is not object.__str__:
        return str(obj)
    return f"{type(obj).__module__}.{type(obj).__name__}"
