from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from ..config import GeneratorOptions
from ..declarations import Declaration
from ..naming import IdentityNameConverter, NameConverter
from .inference import DeclarationResolver, TypeCache
from .naming import model_class_name

__all__ = ['BuildContext']


@dataclass
class BuildContext:
    """Everything one declaration's synthesis pass needs from its host.

    A fresh context, with a fresh :class:`TypeCache`, is created per
    declaration; contexts are never shared across passes.
    """

    declaration: Declaration
    name_converter: NameConverter = field(default_factory=IdentityNameConverter)
    options: GeneratorOptions = field(default_factory=GeneratorOptions)
    resolver: Optional[DeclarationResolver] = None
    cache: TypeCache = field(init=False)

    def __post_init__(self):
        self.cache = TypeCache(self.resolver)

    @property
    def model_class_name(self) -> str:
        return model_class_name(self.declaration)
