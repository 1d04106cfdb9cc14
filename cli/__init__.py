"""
didsign CLI - SS58 addresses and detached document signatures

Commands:
- didsign address encode/decode/validate/convert/networks - SS58 address tools
- didsign key inspect/generate - Mnemonic and derived key inspection
- didsign document sign/verify/status/list/cleanup - Sidecar signatures
"""

__version__ = "0.1.0"
