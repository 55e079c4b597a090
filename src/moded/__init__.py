"""Modal, terminal-resident text editor."""

__all__ = [
    "adapters",
    "buffer",
    "actions",
    "config",
    "editor",
    "highlighting",
    "modes",
    "keymaps",
    "runtime",
    "search",
    "view",
]

__version__ = "0.1.0"
