"""
KI Games - pygame games delivered as self-registering page elements.

Modules:
- elements: element registry (define once per tag name)
- document: page model, script requests, document key events
- host: frame scheduling, element lifecycle, display compositing
- games: game base class, states, overlay, keyboard input
- logging: per-module loggers and structured record sinks
"""

__version__ = "1.0.0"
