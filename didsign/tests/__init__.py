"""
Test suite for didsign.

Focus areas:
- SS58 round-trip, checksum sensitivity and network isolation
- Key derivation against known Substrate vectors
- Sign/verify, tamper detection and wrong-key rejection
- Sidecar lookup and orphan cleanup
"""
