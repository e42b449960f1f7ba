"""ChairUp storefront backend."""

__version__ = "0.3.0"
