"""Runtime package: settings loading, logging, dependency wiring and the process entry point."""

__all__: list[str] = []
