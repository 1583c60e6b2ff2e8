#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/pipeline/__init__.py
"""Pipeline assembly, execution and the renderer factory."""

from zmarkdown.pipeline.builder import HTML_TREE_STAGES, SOURCE_TREE_STAGES, build_pipeline, stage_names
from zmarkdown.pipeline.processor import Processor
from zmarkdown.pipeline.renderer import Renderer, deliver, renderer_factory
from zmarkdown.pipeline.stages import Stage, StageRegistry, StageSpec, stage_registry

__all__ = [
    "HTML_TREE_STAGES",
    "Processor",
    "Renderer",
    "SOURCE_TREE_STAGES",
    "Stage",
    "StageRegistry",
    "StageSpec",
    "build_pipeline",
    "deliver",
    "renderer_factory",
    "stage_names",
    "stage_registry",
]
