"""
Shared utilities and base classes for the Secret Friend API

This module provides organized access to all shared functionality:
- Base classes (BaseModel, BaseAPIView, PublicAPIView)
- Exceptions (business exceptions and the DRF handler)
- DAL decorators and the service paginator
- The service container used by the views

Import specific classes directly from their locations:
- from apps.shared.base.base_api_view import BaseAPIView
- from apps.shared.exceptions import ValidationError
- etc.
"""

# Empty init to avoid circular imports
# All imports should be done directly from submodules
