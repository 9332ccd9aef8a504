"""Modal (vim-style) text editing core with a Textual host."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "editor",
    "keymaps",
    "modes",
    "runtime",
]

__version__ = "0.1.0"
