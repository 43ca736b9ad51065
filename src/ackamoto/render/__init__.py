"""Renderers for verdict reports."""

from ackamoto.render.page import render_error_page, render_page
from ackamoto.render.serialize import report_to_dict

__all__ = [
    "render_error_page",
    "render_page",
    "report_to_dict",
]
