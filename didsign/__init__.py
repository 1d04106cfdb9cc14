"""
didsign

SS58 address codec and detached Sr25519 document signing with sidecar
signature records.
"""

__version__ = "0.1.0"
