"""Shop back office: order placement API and terminal client."""

__version__ = "1.0.0"
