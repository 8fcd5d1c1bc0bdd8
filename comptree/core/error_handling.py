"""
Error handling utilities for comptree.

This module provides the exception hierarchy used throughout the component
tree generator. Errors fall into three groups: parsing errors raised while
turning source into a syntax tree, declaration errors raised while locating a
component's render output, and resolution errors raised while assembling
trees for a whole project. It also provides the decorator that turns any of
those failures into a negative classification.
"""
import functools
import logging
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger('comptree')

class ComponentTreeError(Exception):
    """Base class for all comptree exceptions.

    All exceptions specific to comptree inherit from this class so callers can
    catch them as one family.
    """
    def __init__(self, message: str, **kwargs):
        self.message = message
        self.context = kwargs.get('context', {})

        for key, value in kwargs.items():
            if key != 'context':
                self.context[key] = value

        super().__init__(message)

    def __str__(self) -> str:
        """Return a string representation of the exception.

        If context information is available, it will be included in the string.
        """
        context = {k: v for k, v in self.context.items() if v is not None}
        if not context:
            return self.message

        context_str = ', '.join(f"{k}={v}" for k, v in context.items())
        return f"{self.message} [Context: {context_str}]"


# ===== Configuration Errors =====

class ConfigurationError(ComponentTreeError):
    """Exception raised for issues with project configuration."""
    pass

class InvalidConfigurationError(ConfigurationError):
    """Exception raised when a configuration setting has an invalid value."""
    def __init__(self, setting: str, value: Any, reason: str, **kwargs):
        message = f"Invalid configuration setting '{setting}': {value}. Reason: {reason}"
        super().__init__(message, setting=setting, value=value, reason=reason, **kwargs)
        self.setting = setting
        self.value = value
        self.reason = reason

# ===== Parsing Errors =====

class ParsingError(ComponentTreeError):
    """Exception raised for failures during code parsing."""
    def __init__(self, message: str, path: Optional[str] = None,
                 position: Optional[Tuple[int, int]] = None, **kwargs):
        super().__init__(message, path=path, position=position, **kwargs)
        self.path = path
        self.position = position

class SyntaxError(ParsingError):
    """Exception raised when tree-sitter reports errors in the parsed source."""
    def __init__(self, message: str, path: Optional[str] = None,
                 line: Optional[int] = None, column: Optional[int] = None, **kwargs):
        position = (line, column) if line is not None and column is not None else None
        super().__init__(message, path=path, position=position, **kwargs)
        self.line = line
        self.column = column

# ===== Declaration Errors =====

class DeclarationError(ComponentTreeError):
    """Exception raised when a module does not declare a usable component."""
    pass

class NoDefaultExportError(DeclarationError):
    """Exception raised when a module has no default export statement."""
    def __init__(self, **kwargs):
        super().__init__("Cannot get a default export from a module with no default export statement", **kwargs)

class AmbiguousRenderMethodError(DeclarationError):
    """Exception raised when a component class does not have exactly one render method."""
    def __init__(self, class_name: Optional[str], count: int, **kwargs):
        message = f"Expected exactly one render method in component class, found {count}"
        super().__init__(message, class_name=class_name, count=count, **kwargs)
        self.class_name = class_name
        self.count = count

class InvalidComponentSignatureError(DeclarationError):
    """Exception raised when a function component takes more than one parameter."""
    def __init__(self, function_name: Optional[str], parameter_count: int, **kwargs):
        message = f"Expected a function component to take 0 or 1 parameters, got {parameter_count}"
        super().__init__(message, function_name=function_name,
                         parameter_count=parameter_count, **kwargs)
        self.function_name = function_name
        self.parameter_count = parameter_count

class InvalidDeclarationError(DeclarationError):
    """Exception raised when a declaration cannot hold a component's render output."""
    def __init__(self, reason: str, name: Optional[str] = None, **kwargs):
        super().__init__(f"Invalid component declaration: {reason}", name=name, **kwargs)
        self.name = name
        self.reason = reason

class NonMarkupReturnError(DeclarationError):
    """Exception raised when a render block does not directly return a markup element."""
    def __init__(self, actual_type: Optional[str] = None, **kwargs):
        super().__init__("Expected component render block to directly return JSX",
                         actual_type=actual_type, **kwargs)
        self.actual_type = actual_type

# ===== Resolution Errors =====

class ResolutionError(ComponentTreeError):
    """Exception raised while assembling component trees for a project."""
    pass

class ComponentResolutionError(ResolutionError):
    """Exception raised when the tree for a known component cannot be built."""
    def __init__(self, path: str, **kwargs):
        super().__init__(f"Error parsing component at {path}", path=path, **kwargs)
        self.path = path

class SourceDirectoryError(ResolutionError):
    """Exception raised when the project's source directory cannot be scanned."""
    def __init__(self, src_path: str, **kwargs):
        super().__init__(f"Error reading source directory: {src_path}", src_path=src_path, **kwargs)
        self.src_path = src_path

class InvalidRootComponentError(ResolutionError):
    """Exception raised when the configured root is not recognised as a component."""
    def __init__(self, path: str, **kwargs):
        super().__init__("Cannot recognize given root component as a React component",
                         path=path, **kwargs)
        self.path = path

# ===== Utility Decorators =====

CLASSIFICATION_FAILURES = (ComponentTreeError, OSError, ValueError)

def absorb_classification_errors(func: Callable) -> Callable:
    """
    Decorator turning any classification failure into ``False``.

    Wraps a coroutine function deciding whether a file is a component.
    Parse errors, declaration errors, unreadable files and undecodable
    content all count as "not a component".

    Args:
        func: The coroutine function to wrap

    Returns:
        Wrapped coroutine function
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except CLASSIFICATION_FAILURES as e:
            logger.debug(f"{func.__name__} rejected {args[0] if args else kwargs}: {e}")
            return False

    return wrapper
