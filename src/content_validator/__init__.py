# Content Validator Module
# Schema checks for the externally editable site content document

from .models import Violation, format_violations
from .validator import ContentValidator, validate_content

__all__ = ["ContentValidator", "Violation", "format_violations", "validate_content"]
