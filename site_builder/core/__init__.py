"""GUI-agnostic editing core: catalog, tree model and services."""
