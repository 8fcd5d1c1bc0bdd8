"""
Core enums for the component tree generator.
"""
from enum import Enum

class DeclarationShape(str, Enum):
    """Shapes a default-exported component declaration can take"""
    CLASS = 'class'
    FUNCTION = 'function'
    VARIABLE = 'variable'
    OTHER = 'other'
