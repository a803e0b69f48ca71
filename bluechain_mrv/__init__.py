"""BlueChain MRV: blue carbon project registry, validation and credit wallet API"""

__version__ = "1.0.0"
