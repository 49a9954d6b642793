"""
Mutation payload core package.

Import concrete functionality from explicit submodules:
- `core.messages` for validation message models
- `core.changes` for change diffs and message extraction
- `core.results` for tagged resolver results
- `core.payload` for payload construction
- `core.casing` for key casing helpers
"""

__all__: list[str] = []
