"""Interactive terminal UI for todo-cli."""
