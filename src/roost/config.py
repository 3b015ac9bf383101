"""Application configuration.

AppConfig is a frozen dataclass, fixed before the first request.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have defaults. Override what you need::

        config = AppConfig(debug=True, method_not_allowed=True)
    """

    # Put tracebacks of unexpected failures into 500 bodies
    debug: bool = False

    # 405 with an Allow header instead of 404 when only the method misses
    method_not_allowed: bool = False

    # Limits
    max_body_size: int = 1024 * 1024  # 1 MiB
