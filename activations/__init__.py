"""
Activations module - Burn-once license activation.

This module handles:
- The activation protocol binding a key to the first device that uses it
- Re-verification from the bound device
- Mapping of activation outcomes to client errors
"""
