"""Infrastructure layer — file access for devctl.yaml."""
