"""
Data model for the API catalog.

Descriptors are plain dataclasses. ``ApiCatalog`` owns the two name-keyed
mappings (global functions and classes) and is the only thing the parser
mutates while a run is in progress.

JSON projection:
{
    "globals": {"Sleep": {"name": ..., "description": ..., "returnType": ...,
                          "parameters": [...]}},
    "classes": {"Player": {"name": ..., "methods": [...], "properties": [...]}}
}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Union


@dataclass
class ParameterDescriptor:
    """One documented parameter of a function or method."""
    name: str
    type: str
    description: str = ""
    optional: bool = False

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "optional": self.optional,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> ParameterDescriptor:
        return cls(
            name=data["name"],
            type=data.get("type", ""),
            description=data.get("description", ""),
            optional=bool(data.get("optional", False)),
        )


@dataclass
class PropertyDescriptor:
    """One documented class property."""
    name: str
    type: str
    description: str = ""

    def to_dict(self) -> Dict:
        return {"name": self.name, "type": self.type, "description": self.description}

    @classmethod
    def from_dict(cls, data: Dict) -> PropertyDescriptor:
        return cls(
            name=data["name"],
            type=data.get("type", ""),
            description=data.get("description", ""),
        )


@dataclass
class FunctionDescriptor:
    """A global function or a class method."""
    name: str
    description: str = ""
    return_type: str = ""
    parameters: List[ParameterDescriptor] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "description": self.description,
            "returnType": self.return_type,
            "parameters": [p.to_dict() for p in self.parameters],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> FunctionDescriptor:
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            return_type=data.get("returnType", ""),
            parameters=[ParameterDescriptor.from_dict(p) for p in data.get("parameters", [])],
        )


# Methods and global functions share one shape
MethodDescriptor = FunctionDescriptor


@dataclass
class ClassDescriptor:
    """A documented class with its methods and properties in source order."""
    name: str
    methods: List[MethodDescriptor] = field(default_factory=list)
    properties: List[PropertyDescriptor] = field(default_factory=list)

    def get_method(self, name: str) -> Optional[MethodDescriptor]:
        for method in self.methods:
            if method.name == name:
                return method
        return None

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "methods": [m.to_dict() for m in self.methods],
            "properties": [p.to_dict() for p in self.properties],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> ClassDescriptor:
        return cls(
            name=data["name"],
            methods=[MethodDescriptor.from_dict(m) for m in data.get("methods", [])],
            properties=[PropertyDescriptor.from_dict(p) for p in data.get("properties", [])],
        )


Descriptor = Union[FunctionDescriptor, ClassDescriptor]

SEARCH_KINDS = ("global", "class", "method")


class FrozenCatalogError(TypeError):
    """Raised when writing to a published catalog."""
    pass


class ApiCatalog:
    """Merged mapping of global functions and classes, keyed by name.

    Consumers get read-only views through ``globals`` and ``classes``.
    All writes go through ``merge`` (or its typed variants), which is a
    last-write-wins upsert.

    Once published a catalog is frozen and every write raises
    FrozenCatalogError. Descriptors handed out by a frozen catalog are
    shared with it and must be treated as read-only.
    """

    def __init__(self):
        self._globals: Dict[str, FunctionDescriptor] = {}
        self._classes: Dict[str, ClassDescriptor] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> ApiCatalog:
        """Reject all further writes. Returns the catalog itself."""
        self._frozen = True
        return self

    def _check_writable(self) -> None:
        if self._frozen:
            raise FrozenCatalogError("Catalog is published and can no longer be modified")

    @property
    def globals(self) -> Mapping[str, FunctionDescriptor]:
        return MappingProxyType(self._globals)

    @property
    def classes(self) -> Mapping[str, ClassDescriptor]:
        return MappingProxyType(self._classes)

    def merge(self, name: str, descriptor: Descriptor) -> None:
        """Upsert a descriptor into the mapping matching its type.

        Args:
            name: Key to store the descriptor under
            descriptor: FunctionDescriptor or ClassDescriptor

        Raises:
            TypeError: If the descriptor is neither kind
        """
        if isinstance(descriptor, ClassDescriptor):
            self.merge_class(name, descriptor)
        elif isinstance(descriptor, FunctionDescriptor):
            self.merge_global(name, descriptor)
        else:
            raise TypeError(f"Cannot merge {type(descriptor).__name__} into catalog")

    def merge_global(self, name: str, function: FunctionDescriptor) -> None:
        self._check_writable()
        # Re-inserting moves the key to the end so iteration follows the last write
        self._globals.pop(name, None)
        self._globals[name] = function

    def merge_class(self, name: str, cls: ClassDescriptor) -> None:
        self._check_writable()
        self._classes.pop(name, None)
        self._classes[name] = cls

    def update(self, other: ApiCatalog) -> None:
        """Merge every entry of another catalog, in its order."""
        self._check_writable()
        for name, function in other._globals.items():
            self.merge_global(name, function)
        for name, cls in other._classes.items():
            self.merge_class(name, cls)

    def get_global(self, name: str) -> Optional[FunctionDescriptor]:
        return self._globals.get(name)

    def get_class(self, name: str) -> Optional[ClassDescriptor]:
        return self._classes.get(name)

    def search(self, prefix: str = "", kind: Optional[str] = None) -> List[str]:
        """Find catalog names starting with a prefix (case-insensitive).

        Methods are reported as ``Class.method`` and match either on the
        method name or on the dotted name.

        Args:
            prefix: Name prefix to match
            kind: Restrict to "global", "class" or "method"

        Returns:
            Matching names in catalog order

        Example:
            >>> catalog.search("get", kind="method")
            ['Player.GetHealth', 'Player.GetName']
        """
        if kind is not None and kind not in SEARCH_KINDS:
            raise ValueError(f"Invalid kind '{kind}'. Must be one of: {list(SEARCH_KINDS)}")

        needle = prefix.lower()
        results = []

        if kind in (None, "global"):
            results.extend(name for name in self._globals if name.lower().startswith(needle))

        for class_name, cls in self._classes.items():
            if kind in (None, "class") and class_name.lower().startswith(needle):
                results.append(class_name)
            if kind in (None, "method"):
                for method in cls.methods:
                    dotted = f"{class_name}.{method.name}"
                    if method.name.lower().startswith(needle) or dotted.lower().startswith(needle):
                        results.append(dotted)

        return results

    def method_count(self) -> int:
        return sum(len(cls.methods) for cls in self._classes.values())

    def to_dict(self) -> Dict:
        return {
            "globals": {name: fn.to_dict() for name, fn in self._globals.items()},
            "classes": {name: cls.to_dict() for name, cls in self._classes.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict) -> ApiCatalog:
        catalog = cls()
        for name, fn in data.get("globals", {}).items():
            catalog.merge_global(name, FunctionDescriptor.from_dict(fn))
        for name, class_data in data.get("classes", {}).items():
            catalog.merge_class(name, ClassDescriptor.from_dict(class_data))
        return catalog

    def __len__(self) -> int:
        return len(self._globals) + len(self._classes)

    def __iter__(self) -> Iterator[str]:
        yield from self._globals
        yield from self._classes

    def __eq__(self, other) -> bool:
        if not isinstance(other, ApiCatalog):
            return NotImplemented
        return self._globals == other._globals and self._classes == other._classes

    def __repr__(self) -> str:
        return f"ApiCatalog(globals={len(self._globals)}, classes={len(self._classes)})"
