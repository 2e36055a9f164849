"""Edge Drawing edge and segment detection, pose geometry types and command-line parsing."""

__version__ = "0.1.0"
__all__ = ["command_line", "geometry", "ed_types", "ed_gradient", "ed_linking", "ed"]