from typing import Dict, List, Optional


class AcceleratorError(Exception):
    """
    Base exception for all DDL generator errors
    """
    pass


class ModelHydrationError(AcceleratorError):
    """
    Raised when a model document cannot be mapped to tables / datasets
    """
    pass


class ModelValidationError(AcceleratorError):
    """
    Raised by strict validation when the model has ERROR issues
    """

    def __init__(self, message: str, issues: Optional[List[Dict]] = None):
        super().__init__(message)
        self.issues = issues or []
