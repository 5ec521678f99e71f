"""Session services: query editing, search runner, result model and controller."""
