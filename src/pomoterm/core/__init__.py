"""Core runtime: clock, dispatcher, application state and event loop."""
