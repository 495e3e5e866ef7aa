"""Preview rendering of extracted documents."""

from .preview import Fragment, render_element, render_fragments, render_html

__all__ = [
    "Fragment",
    "render_element",
    "render_fragments",
    "render_html",
]
