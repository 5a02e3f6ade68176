"""Pattern compilation, segmentation and style application."""

from .pattern import (
    FlagsLike,
    PatternCompileError,
    PatternConfig,
    PatternFlag,
    compile_pattern,
)
from .segmentation import Segment, iter_segments, segment_strings, segment_text
from .specs import (
    StyleSpec,
    StyleSpecLike,
    build_block,
    build_runs,
    normalize_specs,
    resolve_attributes,
)

__all__ = [
    "FlagsLike",
    "PatternCompileError",
    "PatternConfig",
    "PatternFlag",
    "Segment",
    "StyleSpec",
    "StyleSpecLike",
    "build_block",
    "build_runs",
    "compile_pattern",
    "iter_segments",
    "normalize_specs",
    "resolve_attributes",
    "segment_strings",
    "segment_text",
]
