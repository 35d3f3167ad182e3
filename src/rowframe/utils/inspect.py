"""Provide insights about Python objects."""

import inspect
from typing import Any


def get_qualname(obj: Any) -> str:
    """Get the qualified name of the given object.

    Used to describe the functions provided by users
    when printing an execution plan.

    For functions or methods, this will return
    something like ``module.class.method`` or
    ``module.function``. Lambdas keep their
    ``<lambda>`` name as Python reports it.

    >>> class Predicates:
    ...   def adults(self, row):
    ...     return row["age"] >= 18
    >>> get_qualname(Predicates().adults)
    'rowframe.utils.inspect.Predicates.adults'
    >>> get_qualname(len)
    'builtins.len'
    """
    module = inspect.getmodule(obj)
    module_name = module.__name__ if module is not None else "builtins"
    if inspect.ismethod(obj) or inspect.isfunction(obj):
        if getattr(obj, "__self__", None) is not None:
            class_name = obj.__self__.__class__.__name__
            return f"{module_name}.{class_name}.{obj.__name__}"
        return f"{module_name}.{obj.__qualname__}"
    elif inspect.isbuiltin(obj) or inspect.isroutine(obj):
        return f"{module_name}.{getattr(obj, '__qualname__', obj.__name__)}"
    elif inspect.isclass(obj):
        return f"{module_name}.{obj.__name__}"
    elif inspect.ismodule(obj):
        return obj.__name__
    return f"{module_name}.{obj.__class__.__name__}"
