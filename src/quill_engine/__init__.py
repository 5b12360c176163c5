"""Line-oriented text buffer engine with generative edits."""

__all__ = [
    "actions",
    "adapters",
    "ai",
    "buffer",
    "keymaps",
    "runtime",
    "session",
]

__version__ = "0.1.0"
