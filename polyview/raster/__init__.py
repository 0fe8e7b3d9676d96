from .canvas import draw_hline, new_canvas
from .draw_lines import draw_polyline, draw_rect_outline
from .draw_markers import draw_diamonds
from .draw_text import draw_text, text_size

__all__ = [
    "draw_diamonds",
    "draw_hline",
    "draw_polyline",
    "draw_rect_outline",
    "draw_text",
    "new_canvas",
    "text_size",
]
