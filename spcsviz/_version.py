"""
Exposes the version of spcsviz
"""

__all__ = ['__version__']

# Read by setup.py; keep the 'vX.Y.Z' literal form
__version__ = 'v0.3.1'
