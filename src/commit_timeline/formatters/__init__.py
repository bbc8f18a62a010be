"""Renderers that turn a TimeSeries into a chart artifact."""

from typing import Dict, Type

from ..exceptions import InvalidConfigError
from .base import BaseRenderer, RenderOptions
from .chart_url_renderer import ChartUrlRenderer
from .glyph_renderer import GlyphRenderer
from .gnuplot_renderer import GnuplotRenderer
from .json_renderer import JsonRenderer

RENDERERS: Dict[str, Type[BaseRenderer]] = {
    "glyph": GlyphRenderer,
    "gnuplot": GnuplotRenderer,
    "url": ChartUrlRenderer,
    "json": JsonRenderer,
}


def get_renderer(name: str, **kwargs) -> BaseRenderer:
    """Instantiate the renderer registered under ``name``."""
    try:
        renderer_cls = RENDERERS[name]
    except KeyError:
        raise InvalidConfigError(
            "renderer", name, f"expected one of {', '.join(RENDERERS)}"
        ) from None
    return renderer_cls(**kwargs)


__all__ = [
    "BaseRenderer",
    "RenderOptions",
    "GlyphRenderer",
    "GnuplotRenderer",
    "ChartUrlRenderer",
    "JsonRenderer",
    "RENDERERS",
    "get_renderer",
]
