from .callbacks_load import register_load_callbacks
from .callbacks_selection import register_selection_callbacks
from .callbacks_batch import register_batch_callbacks
from .callbacks_render import register_render_callbacks

__all__ = [
    "register_load_callbacks",
    "register_selection_callbacks",
    "register_batch_callbacks",
    "register_render_callbacks",
]
