"""fsguard - Safe storage roots, data protection and file operations.

Resolves lifecycle-specific storage roots, applies data-protection classes
to files and directories, and performs fail-safe file operations.
"""

__version__ = "0.1.0"
