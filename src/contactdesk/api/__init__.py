"""API module for ContactDesk.

API layer:
- Validates inputs, calls services
- Wraps payloads in the standard response envelope
- Forbidden: direct SQL, transaction handling
"""
