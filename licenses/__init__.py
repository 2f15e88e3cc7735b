"""
Licenses module - License keys and the license ledger.

This module handles:
- License key format, checksum and expiry encoding
- Key issuance for the plan catalogue
- LicenseRecord entity (a key bound to its first device)
- License ban/unban and the read-only status check
"""
