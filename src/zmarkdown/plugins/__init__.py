#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/__init__.py
"""Source-tree stages.

Each module implements one stage of the rendering pipeline. Stages that add
syntax expose a ``parser_plugin(parser, options)`` registering mistune grammar
rules; stages that rewrite the parsed tree expose a
``transform(tree, file, options)`` function. The stage descriptors tying them
to configuration keys live in :mod:`zmarkdown.pipeline.builtin`.

"""
