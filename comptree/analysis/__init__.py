from .classifier import is_component
from .declarations import find_declaration, resolve_default_export, resolve_render_block
from .elements import potentially_rendered_elements
from .imports import child_component_paths, get_file_ext, get_local_imports
from .scanner import component_paths_in_directory

__all__ = [
    "child_component_paths",
    "component_paths_in_directory",
    "find_declaration",
    "get_file_ext",
    "get_local_imports",
    "is_component",
    "potentially_rendered_elements",
    "resolve_default_export",
    "resolve_render_block",
]
