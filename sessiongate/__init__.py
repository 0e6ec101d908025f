"""
SessionGate - Authentication gate for the inventory API

Decides, per request, whether a caller may proceed using either the shared
data password (HTTP Basic) or a previously issued session cookie.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- auth: Credential extraction and verification
- session: Session record persistence (credential store)
- storage: Redis connection management
- api: Response dispatch and HTTP models
- inventory: Inventory data access
"""

__version__ = "1.0.0"
