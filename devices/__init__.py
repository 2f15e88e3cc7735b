"""
Devices module - Device identity and the device ban registry.

This module handles:
- Device identifier matching (full hash vs. 8-character display prefix)
- DeviceBan entity and the ban registry
- Ban propagation to license records bound to a banned device
"""
