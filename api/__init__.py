"""
API module - HTTP request layer.

This module handles:
- Client license endpoints (activate, check, server time)
- Admin endpoints (key issuance, license and device bans)
- Mapping of domain exceptions to error responses
"""
