"""Provider-agnostic transform layer: modes, spec compilation, normalization."""

from recast.transform.errors import ErrorKind, TransformError, classify_http_error
from recast.transform.modes import ModeDefinition, OutputFormat, lookup
from recast.transform.normalizer import TransformResult, normalize
from recast.transform.spec import GenerationParams, Language, TransformSpec, compile_spec

__all__ = [
    "ErrorKind",
    "GenerationParams",
    "Language",
    "ModeDefinition",
    "OutputFormat",
    "TransformError",
    "TransformResult",
    "TransformSpec",
    "classify_http_error",
    "compile_spec",
    "lookup",
    "normalize",
]
