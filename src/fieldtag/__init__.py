"""fieldtag: tag-driven struct reflection and rule-based validation.

``fieldtag.reflect`` is the module holding the process-wide reflector;
call ``fieldtag.reflect.reflect(value)`` to run it.
"""

from fieldtag import reflect
from fieldtag.errors import (
    FieldTagError,
    FieldValidationError,
    NamedErrors,
    RuleBuildError,
    ValidationError,
)
from fieldtag.reflect import DEFAULT_REFLECTOR
from fieldtag.structs import Handler, Reflector, Tag, tagged
from fieldtag.validation import DEFAULT_BUILDER, Builder, validate, validate_struct

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_BUILDER",
    "DEFAULT_REFLECTOR",
    "Builder",
    "FieldTagError",
    "FieldValidationError",
    "Handler",
    "NamedErrors",
    "Reflector",
    "RuleBuildError",
    "Tag",
    "ValidationError",
    "__version__",
    "reflect",
    "tagged",
    "validate",
    "validate_struct",
]
