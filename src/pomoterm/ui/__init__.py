"""Terminal front end: keyboard input, key routing and rendering."""
