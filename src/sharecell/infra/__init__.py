"""Infrastructure layer — process-wide wiring outside the core.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from sharecell.infra.logging import configure_logging, reset_logging

__all__: list[str] = ["configure_logging", "reset_logging"]
