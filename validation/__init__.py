"""
Verification helpers for payload responses.

Import helpers from explicit submodules:
- `validation.comparator` for typed response comparison
- `validation.mutations` for payload success/failure assertions
- `validation.stringify` for stringifying expected fixtures
- `validation.api_client` for in-process API calls
"""

__all__: list[str] = []
__version__ = "0.1.0"
