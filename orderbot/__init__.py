"""Priority order-dispatch engine: orders, bots and a tick-driven scheduler."""

__version__ = "0.1.0"
