"""recordkeep -- persist flat, typed records as key-value mappings.

Records encode to a ``dict`` of Field Values and decode back with a
round-trip guarantee; backends store those mappings in a key-value store or
a file in the application data directory.
"""

__version__ = "0.1.0"
