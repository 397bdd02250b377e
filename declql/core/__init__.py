# Core subpackage: classification, inference and synthesis of schema descriptors.
from .classifier import TypeKind, classify
from .collector import collect_fields, collect_resolver_methods
from .context import BuildContext
from .enums import build_enum_descriptor
from .inference import Direction, TypeCache, infer_field_type, infer_schema_type
from .resolvers import FieldAccessor, RegistryDispatch, ValueKind, resolver_registry
from .synthesizer import build_class_descriptor, build_input_descriptor, build_object_descriptor
from .unions import build_union_descriptor

__all__ = [
    'TypeKind', 'classify', 'collect_fields', 'collect_resolver_methods', 'BuildContext',
    'build_enum_descriptor', 'Direction', 'TypeCache', 'infer_field_type', 'infer_schema_type',
    'FieldAccessor', 'RegistryDispatch', 'ValueKind', 'resolver_registry',
    'build_class_descriptor', 'build_input_descriptor', 'build_object_descriptor', 'build_union_descriptor',
]
