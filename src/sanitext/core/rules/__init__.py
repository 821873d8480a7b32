"""Import all rule modules so their @registry.register decorators fire.

Import order is pipeline order.
"""

from sanitext.core.rules import (  # noqa: F401
    unicode,
    dashes,
    abbreviations,
)
