"""
Module: bindings.py
Description: Static XML path bindings for result models.

Every result model declares a class-level ``xml_bindings`` table that
maps a field name to one of the bindings below. Paths are ElementTree
paths relative to the document root with namespaces already stripped,
e.g. ``ListQueuesResult/QueueUrl``.

Bindings are lenient: a missing element yields an empty string or an
empty list rather than an error.
strip_namespaces() prepares a parsed document for these paths.
"""

from typing import Any, Dict, List, Type
from xml.etree.ElementTree import Element

from pydantic import BaseModel


class Binding:
    """Base class for a field-to-path binding."""

    def __init__(self, path: str):
        self.path = path

    def extract(self, element: Element) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"


class Text(Binding):
    """Text of the first element at path, or ''."""

    def extract(self, element: Element) -> str:
        found = element.find(self.path)
        if found is None or found.text is None:
            return ""
        return found.text


class TextList(Binding):
    """Texts of every element at path, in document order."""

    def extract(self, element: Element) -> List[str]:
        return [found.text or "" for found in element.findall(self.path)]


class Pairs(Binding):
    """Name/value children of every element at path, in document order."""

    def __init__(self, path: str, name: str = "Name", value: str = "Value"):
        super().__init__(path)
        self.name = name
        self.value = value

    def extract(self, element: Element) -> List[Dict[str, str]]:
        return [
            {
                "name": Text(self.name).extract(found),
                "value": Text(self.value).extract(found),
            }
            for found in element.findall(self.path)
        ]


class Nested(Binding):
    """Every element at path bound to a sub-model, in document order."""

    def __init__(self, path: str, model: Type[BaseModel]):
        super().__init__(path)
        self.model = model

    def extract(self, element: Element) -> List[BaseModel]:
        return [bind(found, self.model) for found in element.findall(self.path)]


def bind(element: Element, model: Type[BaseModel]) -> BaseModel:
    """
    Build a model instance from an element using its xml_bindings.

    Args:
        element: Namespace-free element the binding paths are relative to
        model: Result model class declaring xml_bindings

    Returns:
        Validated model instance
    """
    bindings: Dict[str, Binding] = getattr(model, "xml_bindings", {})
    values = {field: binding.extract(element) for field, binding in bindings.items()}
    return model(**values)


def strip_namespaces(root: Element) -> Element:
    """Drop '{namespace}' prefixes from every tag under root, in place."""
    for element in root.iter():
        if isinstance(element.tag, str) and element.tag.startswith("{"):
            element.tag = element.tag.split("}", 1)[1]
    return root
