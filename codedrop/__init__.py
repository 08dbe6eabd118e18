"""
CodeDrop

Ephemeral file-sharing relay: upload a file, get a six-character code,
retrieve it with the code until it expires or is burned.
"""

__version__ = "1.0.0"
