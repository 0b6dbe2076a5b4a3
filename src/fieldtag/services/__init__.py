"""Service layer: operations shared by the CLI and embedding programs."""
