"""Terminal front-end: key decoding, raw input, rendering and the event loop."""
