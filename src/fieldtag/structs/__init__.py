"""Struct reflection: annotation parsing, field metadata and the tag walker."""

from fieldtag.structs.fields import (
    FieldInfo,
    FieldRef,
    Tag,
    get_field_by_path,
    is_struct,
    struct_fields,
    tagged,
)
from fieldtag.structs.handler import FunctionHandler, Handler, new_handler
from fieldtag.structs.reflector import STOP_TAG, Reflector
from fieldtag.structs.setters import DefaultHandler, InjectHandler, Injector, Setter, SetterHandler
from fieldtag.structs.tags import iter_tags, lookup_tag, parse_tags, unquote

__all__ = [
    "STOP_TAG",
    "DefaultHandler",
    "FieldInfo",
    "FieldRef",
    "FunctionHandler",
    "Handler",
    "InjectHandler",
    "Injector",
    "Reflector",
    "Setter",
    "SetterHandler",
    "Tag",
    "get_field_by_path",
    "is_struct",
    "iter_tags",
    "lookup_tag",
    "new_handler",
    "parse_tags",
    "struct_fields",
    "tagged",
    "unquote",
]
