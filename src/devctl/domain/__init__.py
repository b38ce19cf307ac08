"""Domain layer — pure parsing and rule logic, no I/O."""
