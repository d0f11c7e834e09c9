"""Small filesystem and text helpers shared by the storage and catalog layers."""

__all__ = [
    "fs",
    "jsonio",
    "slug",
]
