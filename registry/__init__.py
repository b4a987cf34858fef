"""
Registry module - digital asset license registry.

This module handles:
- License issuance (single and batched)
- Ownership transfer initiated by the recipient
- Permanent revocation
- Holder-driven metadata updates
"""
